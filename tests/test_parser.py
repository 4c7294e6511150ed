"""
tests/test_parser.py

    tests for the dispatch parser
"""


import pytest

from pyliquid import (
    EmptyInputError, Formula, InputTooLongError, LipidCategory, LipidLevel, LipidParser, LipidSemanticError,
    LipidSyntaxError, NestingTooDeepError, NoMatchingDialectError, UnknownNameError, parse_lipid_name
)
from pyliquid.parser import best_failure


@pytest.fixture(scope='module')
def parser():
    return LipidParser()


def test_species_scenario():
    lipid = parse_lipid_name('PC 34:1')
    assert lipid.lipid_class == 'PC'
    assert lipid.category is LipidCategory.GP
    assert lipid.lipid.info.carbons == 34
    assert lipid.lipid.info.double_bonds == 1
    assert lipid.level == LipidLevel.SPECIES
    assert str(lipid.get_sum_formula()) == 'C42H82NO8P'
    assert lipid.get_mass() == pytest.approx(759.5778, abs=1e-4)


def test_full_structure_scenario():
    lipid = parse_lipid_name('PC(16:0/18:1(9Z))')
    assert lipid.level == LipidLevel.FULL_STRUCTURE
    chains = lipid.lipid.chains
    assert (chains[0].carbons, chains[0].double_bonds.count, chains[0].sn_position) == (16, 0, 1)
    assert (chains[1].carbons, chains[1].double_bonds.count, chains[1].sn_position) == (18, 1, 2)
    assert chains[1].double_bonds.positions == {9: 'Z'}


def test_sum_formula_scenario():
    formula = parse_lipid_name('C16H32O2')
    assert isinstance(formula, Formula)
    assert (formula['C'], formula['H'], formula['O']) == (16, 32, 2)


@pytest.mark.parametrize('name', ['', '   ', '\t', None])
def test_empty_input(name):
    with pytest.raises(EmptyInputError):
        parse_lipid_name(name)


def test_empty_input_skips_dialects():
    messages = []
    with pytest.raises(EmptyInputError):
        parse_lipid_name('', debug_flag='textcb', debug_cb=messages.append)
    assert messages == []


def test_input_too_long():
    with pytest.raises(InputTooLongError) as excinfo:
        LipidParser(max_length=10).parse('PC 16:0/18:1(9Z)')
    assert excinfo.value.limit == 10
    assert excinfo.value.length == 16


def test_too_many_double_bonds_scenario():
    with pytest.raises(NoMatchingDialectError) as excinfo:
        parse_lipid_name('PC 34:99')
    assert isinstance(excinfo.value.primary, LipidSemanticError)
    assert 'double bond count (99)' in str(excinfo.value.primary)
    with pytest.raises(LipidSemanticError):
        parse_lipid_name('PC 34:99', dialect='shorthand')


def test_unknown_headgroup_scenario():
    with pytest.raises(NoMatchingDialectError) as excinfo:
        parse_lipid_name('XYZ 34:1')
    primary = excinfo.value.primary
    assert isinstance(primary, UnknownNameError)
    assert primary.kind == 'HeadGroup'
    assert primary.value == 'XYZ'


def test_all_failures_reported():
    with pytest.raises(NoMatchingDialectError) as excinfo:
        parse_lipid_name('PC 34:1xyz')
    err = excinfo.value
    assert list(err.failures) == ['shorthand', 'fatty_acid', 'goslin', 'lipidmaps', 'swisslipids', 'hmdb',
                                  'sum_formula']
    assert all(isinstance(failure, LipidSyntaxError) for failure in err.failures.values())
    assert err.primary is err.failures['shorthand']
    assert err.primary.position == 7


@pytest.mark.parametrize('name,dialect', [
    ('PC 34:1', 'shorthand'),
    ('oleic acid', 'fatty_acid'),
    ('PC 16:0-18:1', 'goslin'),
    ('Cer 18:1;2/16:0', 'goslin'),
    ('PC(16:0/18:1(9Z))', 'lipidmaps'),
    ('TG(16:0/18:1(9Z)/18:2(9Z,12Z))[iso6]', 'hmdb'),
    ('C16H32O2', 'sum_formula'),
])
def test_dialect_detection(parser, name, dialect):
    assert parser.parse_dialect(name)[1] == dialect


def test_dialect_hint(parser):
    assert parser.parse('PC(16:0/18:1)', dialect='swisslipids').get_lipid_string() == 'PC 16:0/18:1'
    with pytest.raises(LipidSyntaxError):
        parser.parse('PC 34:1', dialect='swisslipids')


def test_unknown_dialect():
    with pytest.raises(ValueError):
        LipidParser(dialects=['klingon'])
    with pytest.raises(ValueError):
        LipidParser(dialects=['shorthand']).parse('PC 34:1', dialect='lipidmaps')


def test_restricted_dialects():
    parser = LipidParser(dialects=['lipidmaps'])
    assert parser.parse('PC 34:1').level == LipidLevel.SPECIES
    with pytest.raises(NoMatchingDialectError):
        parser.parse('C16H32O2')


def test_debug_messages():
    messages = []
    parse_lipid_name('C16H32O2', debug_flag='textcb', debug_cb=messages.append)
    assert all(msg.startswith('DEBUG: ') for msg in messages)
    assert len(messages) == 7
    assert 'sum_formula' in messages[-1]


def test_deterministic_errors(parser):
    errors = []
    for _ in range(2):
        with pytest.raises(NoMatchingDialectError) as excinfo:
            parser.parse('PC 34:1xyz')
        errors.append(str(excinfo.value))
    assert errors[0] == errors[1]


def test_best_failure_ordering():
    early = LipidSyntaxError('a', 3, 'r', 'abcdef')
    late = LipidSyntaxError('b', 5, 'r', 'abcdef')
    tie = LipidSyntaxError('c', 5, 'r', 'abcdef')
    semantic = LipidSemanticError('db_count', 'too many')
    assert best_failure({'a': early, 'b': late, 'c': tie}) is late
    assert best_failure({'a': early, 'b': semantic, 'c': late}) is semantic


@pytest.mark.parametrize('name', [
    'PC 34:1',
    'PC(16:0/18:1(9Z))',
    'Cer(d18:1/16:0)',
    'Cer(t18:0/24:0(2OH))',
    'LysoPC(18:1(9Z)/0:0)',
    'TG(16:0/18:1(9Z)/18:2(9Z,12Z))[iso6]',
    '(9Z,12Z)-octadeca-9,12-dienoic acid',
    'PE 16:0/20:4;O[M-H]1-',
])
def test_serialization_idempotent(parser, name):
    once = parser.parse(name).get_lipid_string()
    twice = parser.parse(once).get_lipid_string()
    assert once == twice
    assert parser.parse(once) == parser.parse(twice)


@pytest.mark.parametrize('name', ['PC 16:0/18:1(9Z)', 'Cer 18:1;O2/16:0', 'TG 16:0_18:1_18:2'])
def test_downgrade_idempotent(parser, name):
    lipid = parser.parse(name).lipid
    for level in LipidLevel:
        if level <= lipid.level:
            assert lipid.downgrade(level).downgrade(level) == lipid.downgrade(level)


def test_formula_constant_across_dialects(parser):
    names = ['PC 16:0/18:1(9Z)', 'PC(16:0/18:1(9Z))', 'PC 34:1', 'PC 16:0_18:1']
    formulas = {str(parser.parse(name).get_sum_formula()) for name in names}
    assert formulas == {'C42H82NO8P'}


def test_deeply_nested_name_fails_cleanly(parser):
    name = 'FA 30:0' + ';12(FA 30:0' * 34 + ')' * 34
    with pytest.raises(NoMatchingDialectError) as excinfo:
        parser.parse(name)
    assert isinstance(excinfo.value.failures['shorthand'], NestingTooDeepError)
    assert excinfo.value.primary is excinfo.value.failures['shorthand']
