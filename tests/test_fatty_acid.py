"""
tests/test_fatty_acid.py

    tests for the fatty acid name handler
"""


import pytest

from pyliquid.dialects import fatty_acid_handler, shorthand_handler
from pyliquid.errors import LipidSemanticError, LipidSyntaxError
from pyliquid.lipids import LipidLevel


@pytest.fixture(scope='module')
def handler():
    return fatty_acid_handler()


@pytest.mark.parametrize('name,expected,level', [
    ('hexadecanoic acid', 'FA 16:0', LipidLevel.FULL_STRUCTURE),
    ('octadec-9-enoic acid', 'FA 18:1(9)', LipidLevel.STRUCTURE_DEFINED),
    ('(9Z)-octadec-9-enoic acid', 'FA 18:1(9Z)', LipidLevel.FULL_STRUCTURE),
    ('(9Z,12Z)-octadeca-9,12-dienoic acid', 'FA 18:2(9Z,12Z)', LipidLevel.FULL_STRUCTURE),
    ('12-hydroxyoctadecanoic acid', 'FA 18:0;12OH', LipidLevel.FULL_STRUCTURE),
    ('9,10-dihydroxyoctadecanoic acid', 'FA 18:0;9OH,10OH', LipidLevel.FULL_STRUCTURE),
    ('(9Z,12R)-12-hydroxyoctadec-9-enoic acid', 'FA 18:1(9Z);12OH[R]', LipidLevel.COMPLETE_STRUCTURE),
    ('oleic acid', 'FA 18:1(9Z)', LipidLevel.FULL_STRUCTURE),
    ('arachidonic acid', 'FA 20:4(5Z,8Z,11Z,14Z)', LipidLevel.FULL_STRUCTURE),
])
def test_names(handler, name, expected, level):
    lipid = handler.parse(name)
    assert lipid.lipid_class == 'FA'
    assert lipid.level == level
    assert lipid.get_lipid_string() == expected


def test_formula(handler):
    assert str(handler.parse('hexadecanoic acid').get_sum_formula()) == 'C16H32O2'
    assert str(handler.parse('12-hydroxyoctadecanoic acid').get_sum_formula()) == 'C18H36O3'


def test_matches_shorthand(handler):
    shorthand = shorthand_handler()
    assert handler.parse('oleic acid') == handler.parse('(9Z)-octadec-9-enoic acid')
    assert handler.parse('(9Z,12R)-12-hydroxyoctadec-9-enoic acid') == shorthand.parse('FA 18:1(9Z);12OH[R]')


def test_chain_is_sn1(handler):
    assert handler.parse('hexadecanoic acid').lipid.chains[0].sn_position == 1


def test_geometry_without_double_bond(handler):
    with pytest.raises(LipidSemanticError):
        handler.parse('(12Z)-octadec-9-enoic acid')


def test_stereo_without_substituent(handler):
    with pytest.raises(LipidSemanticError):
        handler.parse('(12R)-octadecanoic acid')


def test_multiplier_mismatch(handler):
    with pytest.raises(LipidSemanticError):
        handler.parse('octadeca-9,12-enoic acid')
    with pytest.raises(LipidSemanticError):
        handler.parse('9-dihydroxyoctadecanoic acid')


def test_unknown_name(handler):
    with pytest.raises(LipidSyntaxError):
        handler.parse('foobaric acid')


def test_trailing_garbage(handler):
    with pytest.raises(LipidSyntaxError) as excinfo:
        handler.parse('oleic acidx')
    assert excinfo.value.position == 10
