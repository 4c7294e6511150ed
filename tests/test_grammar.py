"""
tests/test_grammar.py

    tests for grammar loading and the chart parser
"""


import pytest

from pyliquid.grammar import (
    ChartParser, Grammar, GrammarDefinitionError, GrammarDepthExceeded, GrammarMismatch, tokenize
)


def _parse(grammar_text, text):
    return ChartParser(Grammar('test', grammar_text)).parse(text)


def test_tokenize():
    lexemes = tokenize('PC 34:1')
    assert len(lexemes) == 7
    assert lexemes[3].char == '3'
    assert lexemes[3].position == 3


def test_grammar_rules_and_start():
    grammar = Grammar('test', """
        // comment
        s : a b? ;
        a : 'x' | 'y' ;
        b : ('z')+ ;
    """)
    assert grammar.start == 's'
    assert grammar.rule_names() == ['s', 'a', 'b']


def test_grammar_undefined_reference():
    with pytest.raises(GrammarDefinitionError):
        Grammar('test', "s : t ;")


def test_grammar_duplicate_rule():
    with pytest.raises(GrammarDefinitionError):
        Grammar('test', "s : 'a' ; s : 'b' ;")


def test_grammar_missing_semicolon():
    with pytest.raises(GrammarDefinitionError):
        Grammar('test', "s : 'a'")


def test_grammar_empty():
    with pytest.raises(GrammarDefinitionError):
        Grammar('test', "// nothing here")


def test_escaped_literal():
    tree = _parse("s : 'it\\'s' ;", "it's")
    assert tree.text == "it's"


def test_ordered_choice_prefers_first_alternative():
    tree = _parse("s : a | b ; a : 'x' ; b : 'x' ;", 'x')
    assert tree.children[0].rule == 'a'
    tree = _parse("s : b | a ; a : 'x' ; b : 'x' ;", 'x')
    assert tree.children[0].rule == 'b'


def test_optional_prefers_presence():
    # both derivations span 'ab', the one that uses the optional symbol wins
    tree = _parse("s : a? rest ; a : 'a' ; rest : 'ab' | 'b' ;", 'ab')
    assert [child.rule for child in tree.children] == ['a', 'rest']
    assert tree.child('rest').text == 'b'


def test_repetition_and_groups():
    tree = _parse("s : item (',' item)* ; item : 'a' | 'b' ;", 'a,b,a')
    # group contents are spliced into the parent node, literals are not materialized
    assert [child.text for child in tree.children_of('item')] == ['a', 'b', 'a']


def test_start_rule_with_groups():
    grammar = Grammar('test', "s : item (',' item)* ; item : ('a' | 'b')+ ;")
    assert grammar.start == 's'
    assert list(grammar.rules) == ['s', '_group_1', 'item', '_group_2']
    assert grammar.rule_names() == ['s', 'item']


def test_ambiguous_input_needs_backtracking():
    # greedy word would swallow the digits, the chart still finds the derivation that spans the input
    tree = _parse("s : word number ; word : c+ ; number : d+ ; c : 'a' | '1' ; d : '1' ;", 'aa11')
    assert tree.child('word').text == 'aa1'
    assert tree.child('number').text == '1'


def test_furthest_failure_position():
    with pytest.raises(GrammarMismatch) as excinfo:
        _parse("s : 'ab' c | 'a' 'x' 'y' ; c : 'c' ;", 'abd')
    assert excinfo.value.position == 2
    assert excinfo.value.rule == 'c'


def test_trailing_input_fails_at_end_of_match():
    with pytest.raises(GrammarMismatch) as excinfo:
        _parse("s : 'ab' ;", 'abzzz')
    assert excinfo.value.position == 2


def test_left_recursion_terminates():
    grammar = "expr : expr '+' term | term ; term : 'a' ;"
    assert _parse(grammar, 'a').text == 'a'
    with pytest.raises(GrammarMismatch):
        _parse(grammar, 'a+a')


def test_alternate_start_rule():
    parser = ChartParser(Grammar('test', "s : a a ; a : 'x' ;"))
    assert parser.parse('x', start='a').rule == 'a'
    with pytest.raises(GrammarMismatch):
        parser.parse('x')


def test_parser_is_reusable():
    parser = ChartParser(Grammar('test', "s : 'x'+ ;"))
    assert parser.parse('xxx').end == 3
    assert parser.parse('x').end == 1


def test_nesting_limit():
    parser = ChartParser(Grammar('test', "s : '(' s ')' | 'x' ;"), max_depth=10)
    assert parser.parse('(' * 5 + 'x' + ')' * 5).end == 11
    with pytest.raises(GrammarDepthExceeded) as excinfo:
        parser.parse('(' * 12 + 'x' + ')' * 12)
    assert excinfo.value.rule == 's'
    assert excinfo.value.position == 10
    # the parser keeps no state from the failed call
    assert parser.parse('x').end == 1
