"""
tests/test_swisslipids.py

    tests for the SwissLipids notation handler
"""


import pytest

from pyliquid.dialects import swisslipids_handler
from pyliquid.errors import LipidSyntaxError
from pyliquid.lipids import LipidLevel


@pytest.fixture(scope='module')
def handler():
    return swisslipids_handler()


def test_ether_with_positions(handler):
    lipid = handler.parse('PE(O-18:1(9Z)/22:6(4Z,7Z,10Z,13Z,16Z,19Z))')
    assert lipid.level == LipidLevel.FULL_STRUCTURE
    assert lipid.get_lipid_string() == 'PE O-18:1(9Z)/22:6(4Z,7Z,10Z,13Z,16Z,19Z)'
    assert str(lipid.get_sum_formula()) == 'C45H78NO7P'


def test_molecular_species(handler):
    lipid = handler.parse('TG(16:0_18:1_18:2)')
    assert lipid.level == LipidLevel.MOLECULAR_SPECIES
    assert lipid.get_lipid_string() == 'TG 16:0_18:1_18:2'


def test_ceramide(handler):
    lipid = handler.parse('Cer(d18:1(4E)/24:0(2OH))')
    assert lipid.get_lipid_string() == 'Cer 18:1(4E);1OH,3OH/24:0;2OH'


def test_space_form_rejected(handler):
    with pytest.raises(LipidSyntaxError) as excinfo:
        handler.parse('PC 34:1')
    assert excinfo.value.position == 2


def test_adduct_rejected(handler):
    with pytest.raises(LipidSyntaxError):
        handler.parse('PC(16:0/18:1)[M+H]+')
