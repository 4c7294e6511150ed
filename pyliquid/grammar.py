"""
pyliquid/grammar.py

    generic grammar loading and chart parsing

    Grammars are written in a small ANTLR-like notation:

        rule_name : symbol symbol* | alternative ;

    where a symbol is a rule reference, a single quoted literal ('FA ', '\\'' for an apostrophe) or a parenthesized
    group of alternatives, optionally followed by one of the postfix operators ?, * or +. Alternatives may be empty and
    // starts a comment that runs to the end of the line.

    Parsing is memoized recursive descent keyed by (rule, start position) that records every end position a rule can
    reach together with the first derivation found for it. Alternatives are tried in declaration order, repetitions
    prefer more iterations and optional symbols prefer presence, so the derivation that is kept for a span is always
    the one an ordered choice parser would pick. Left recursion is not supported and rule expansion stops with
    GrammarDepthExceeded once it nests deeper than the parser allows.
"""


import re
from collections import namedtuple

from pyliquid._config import MAX_RULE_DEPTH


# lexeme of the input text: one character and its position
Lexeme = namedtuple('Lexeme', ['char', 'position'])

# grammar symbol: kind is 'rule' or 'literal', op is None, '?', '*' or '+'
Symbol = namedtuple('Symbol', ['kind', 'value', 'op'])


class GrammarMismatch(Exception):
    """
    raised by ``ChartParser.parse`` when no derivation of the start rule spans the whole input

    Attributes
    ----------
    rule : ``str``
        rule that was being expanded at the furthest failure position
    position : ``int``
        furthest input position reached before matching failed
    """

    def __init__(self, rule, position):
        self.rule = rule
        self.position = position
        super().__init__('no match for rule "{}" at position {}'.format(rule, position))


class GrammarDepthExceeded(Exception):
    """
    raised by ``ChartParser.parse`` when rule expansion nests deeper than the parser allows

    Attributes
    ----------
    rule : ``str``
        rule that would have been expanded past the limit
    position : ``int``
        input position of that expansion
    max_depth : ``int``
        maximum number of nested rule expansions
    """

    def __init__(self, rule, position, max_depth):
        self.rule = rule
        self.position = position
        self.max_depth = max_depth
        msg = 'rule "{}" at position {} is nested more than {} rules deep'
        super().__init__(msg.format(rule, position, max_depth))


class GrammarDefinitionError(ValueError):
    """ raised when a grammar text cannot be loaded """


class ParseTree():
    """
    node of a parse tree

    Attributes
    ----------
    rule : ``str``
        name of the rule this node was derived from
    start : ``int``
        start of the matched span
    end : ``int``
        end of the matched span (exclusive)
    text : ``str``
        matched text
    children : ``list(ParseTree)``
        child nodes in input order (literals are not materialized)
    """

    __slots__ = ('rule', 'start', 'end', 'text', 'children')

    def __init__(self, rule, start, end, text, children):
        self.rule = rule
        self.start = start
        self.end = end
        self.text = text
        self.children = children

    def child(self, rule):
        """ first direct child derived from ``rule``, None if there is none """
        for node in self.children:
            if node.rule == rule:
                return node
        return None

    def children_of(self, rule):
        """ all direct children derived from ``rule`` """
        return [node for node in self.children if node.rule == rule]

    def __repr__(self):
        return 'ParseTree(rule="{}", text="{}")'.format(self.rule, self.text)


class _Rule():
    """ grammar rule: name and alternatives (each a list of Symbols), anonymous rules come from groups """

    def __init__(self, name, alternatives, anonymous=False):
        self.name = name
        self.alternatives = alternatives
        self.anonymous = anonymous


_TOKEN_REGEX = re.compile(r"""
    (?P<ws>\s+)
    |(?P<comment>//[^\n]*)
    |(?P<literal>'(?:\\.|[^'\\])*')
    |(?P<name>[A-Za-z_][A-Za-z0-9_]*)
    |(?P<punct>[:|;?*+()])
""", re.VERBOSE)


def _unescape(literal):
    """ strips the quotes off a literal and resolves backslash escapes """
    return re.sub(r'\\(.)', r'\1', literal[1:-1])


class Grammar():
    """
    grammar loaded from its text definition

    Parameters
    ----------
    name : ``str``
        grammar name (used in diagnostics)
    text : ``str``
        grammar definition
    start : ``str``, optional
        start rule, defaults to the first rule of the definition

    Attributes
    ----------
    rules : ``dict(str:_Rule)``
        rules by name, in declaration order
    """

    def __init__(self, name, text, start=None):
        self.name = name
        self.rules = {}
        self._n_groups = 0
        self._tokens = self._lex(text)
        self._i = 0
        while self._i < len(self._tokens):
            self._parse_rule()
        if not self.rules:
            raise GrammarDefinitionError('Grammar: __init__: grammar "{}" defines no rules'.format(name))
        self.start = start if start is not None else next(iter(self.rules))
        self._check_references()
        del self._tokens

    @staticmethod
    def _lex(text):
        tokens, pos = [], 0
        while pos < len(text):
            mat = _TOKEN_REGEX.match(text, pos)
            if mat is None:
                msg = 'Grammar: _lex: unexpected character "{}" at position {}'
                raise GrammarDefinitionError(msg.format(text[pos], pos))
            if mat.lastgroup in ('literal', 'name', 'punct'):
                tokens.append((mat.lastgroup, mat.group()))
            pos = mat.end()
        return tokens

    def _peek(self):
        return self._tokens[self._i] if self._i < len(self._tokens) else (None, None)

    def _expect(self, kind, value=None):
        token = self._peek()
        if token[0] != kind or (value is not None and token[1] != value):
            msg = 'Grammar: _expect: expected {} but found "{}" (grammar: {})'
            raise GrammarDefinitionError(msg.format(value or kind, token[1], self.name))
        self._i += 1
        return token[1]

    def _parse_rule(self):
        name = self._expect('name')
        if name in self.rules:
            msg = 'Grammar: _parse_rule: rule "{}" is defined more than once (grammar: {})'
            raise GrammarDefinitionError(msg.format(name, self.name))
        self._expect('punct', ':')
        # registered before its alternatives so that groups inside it come after it in declaration order
        self.rules[name] = None
        self.rules[name] = _Rule(name, self._parse_alternatives())
        self._expect('punct', ';')

    def _parse_alternatives(self):
        alternatives = [self._parse_sequence()]
        while self._peek() == ('punct', '|'):
            self._i += 1
            alternatives.append(self._parse_sequence())
        return alternatives

    def _parse_sequence(self):
        sequence = []
        while True:
            kind, value = self._peek()
            if kind == 'name':
                self._i += 1
                symbol = Symbol('rule', value, None)
            elif kind == 'literal':
                self._i += 1
                literal = _unescape(value)
                if not literal:
                    msg = 'Grammar: _parse_sequence: empty literal (grammar: {})'
                    raise GrammarDefinitionError(msg.format(self.name))
                symbol = Symbol('literal', literal, None)
            elif (kind, value) == ('punct', '('):
                self._i += 1
                self._n_groups += 1
                group_name = '_group_{}'.format(self._n_groups)
                self.rules[group_name] = _Rule(group_name, self._parse_alternatives(), anonymous=True)
                self._expect('punct', ')')
                symbol = Symbol('rule', group_name, None)
            else:
                return sequence
            kind, value = self._peek()
            if kind == 'punct' and value in '?*+':
                self._i += 1
                symbol = symbol._replace(op=value)
            sequence.append(symbol)

    def _check_references(self):
        for rule in self.rules.values():
            for alternative in rule.alternatives:
                for symbol in alternative:
                    if symbol.kind == 'rule' and symbol.value not in self.rules:
                        msg = 'Grammar: _check_references: rule "{}" references undefined rule "{}" (grammar: {})'
                        raise GrammarDefinitionError(msg.format(rule.name, symbol.value, self.name))
        if self.start not in self.rules:
            msg = 'Grammar: _check_references: start rule "{}" is not defined (grammar: {})'
            raise GrammarDefinitionError(msg.format(self.start, self.name))

    def rule_names(self):
        """ names of all named (non-anonymous) rules """
        return [name for name, rule in self.rules.items() if not rule.anonymous]


def tokenize(text):
    """
    splits the input into character lexemes

    Parameters
    ----------
    text : ``str``
        input text

    Returns
    -------
    lexemes : ``list(Lexeme)``
        one lexeme per character
    """
    return [Lexeme(char, position) for position, char in enumerate(text)]


class _Chart():
    """ per-call parse state: memo table, left recursion guard and furthest failure """

    def __init__(self, grammar, text, max_depth):
        self.grammar = grammar
        self.text = text
        self.max_depth = max_depth
        self.lexemes = tokenize(text)
        self.memo = {}
        self.active = set()
        self.stack = []
        self.furthest = -1
        self.furthest_rule = grammar.start

    def _fail(self, position):
        if position > self.furthest:
            self.furthest = position
            self.furthest_rule = next((name for name in reversed(self.stack)
                                       if not self.grammar.rules[name].anonymous), self.grammar.start)

    def match_literal(self, literal, position):
        end = position + len(literal)
        if end <= len(self.lexemes) and all(self.lexemes[position + i].char == c for i, c in enumerate(literal)):
            return [(end, [])]
        self._fail(position)
        return []

    def match_rule(self, name, position):
        """ all (end, ParseTree) pairs for rule ``name`` starting at ``position``, preferred derivations first """
        key = (name, position)
        if key in self.memo:
            return self.memo[key]
        if key in self.active:
            # left recursion, this path contributes nothing
            return []
        if len(self.stack) >= self.max_depth:
            raise GrammarDepthExceeded(name, position, self.max_depth)
        self.active.add(key)
        self.stack.append(name)
        ends = {}
        for alternative in self.grammar.rules[name].alternatives:
            for end, children in self.match_sequence(alternative, position):
                if end not in ends:
                    ends[end] = children
        self.stack.pop()
        self.active.discard(key)
        text = self.text
        results = [(end, ParseTree(name, position, end, text[position:end], children)) for end, children in ends.items()]
        self.memo[key] = results
        return results

    def _match_atom(self, symbol, position):
        if symbol.kind == 'literal':
            return self.match_literal(symbol.value, position)
        results = self.match_rule(symbol.value, position)
        if self.grammar.rules[symbol.value].anonymous:
            return [(end, tree.children) for end, tree in results]
        return [(end, [tree]) for end, tree in results]

    def _match_repeated(self, symbol, position):
        # one frontier per iteration count, positions strictly increase so this ends after len(text) rounds
        levels = [{position: []}]
        while levels[-1]:
            level = {}
            for start, children in levels[-1].items():
                for end, new_children in self._match_atom(symbol, start):
                    if end > start and end not in level:
                        level[end] = children + new_children
            levels.append(level)
        first = 0 if symbol.op == '*' else 1
        results, seen = [], set()
        for level in reversed(levels[first:]):
            for end, children in level.items():
                if end not in seen:
                    seen.add(end)
                    results.append((end, children))
        return results

    def match_symbol(self, symbol, position):
        if symbol.op is None:
            return self._match_atom(symbol, position)
        if symbol.op == '?':
            results = self._match_atom(symbol, position)
            if all(end != position for end, _ in results):
                results = results + [(position, [])]
            return results
        return self._match_repeated(symbol, position)

    def match_sequence(self, sequence, position):
        partials = [(position, [])]
        for symbol in sequence:
            extended = {}
            for start, children in partials:
                for end, new_children in self.match_symbol(symbol, start):
                    if end not in extended:
                        extended[end] = children + new_children
            partials = list(extended.items())
            if not partials:
                break
        return partials


class ChartParser():
    """
    chart parser for a ``Grammar``, holds no per-call state and can be shared between threads

    Parameters
    ----------
    grammar : ``Grammar``
        grammar to parse with
    max_depth : ``int``, default=MAX_RULE_DEPTH
        maximum number of nested rule expansions, deeper inputs raise GrammarDepthExceeded
    """

    def __init__(self, grammar, max_depth=MAX_RULE_DEPTH):
        self.grammar = grammar
        self.max_depth = max_depth

    def parse(self, text, start=None):
        """
        parses ``text`` with the grammar

        Parameters
        ----------
        text : ``str``
            input text
        start : ``str``, optional
            rule to start from, defaults to the start rule of the grammar

        Returns
        -------
        tree : ``ParseTree``
            preferred derivation of the start rule spanning the whole input
        """
        start = self.grammar.start if start is None else start
        chart = _Chart(self.grammar, text, self.max_depth)
        results = chart.match_rule(start, 0)
        for end, tree in results:
            if end == len(text):
                return tree
        # a match that stops short of the end of the input fails where it stopped
        position, rule = chart.furthest, chart.furthest_rule
        longest = max((end for end, _ in results), default=-1)
        if longest > position:
            position, rule = longest, start
        raise GrammarMismatch(rule, max(position, 0))
