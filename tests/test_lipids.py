"""
tests/test_lipids.py

    tests for the lipid domain model: chains, functional groups, head groups, levels, adducts
"""


import pytest

from pyliquid.lipids import (
    Adduct, ChainBondType, DoubleBonds, FattyAcid, FunctionalGroup, Headgroup, LipidAdduct, LipidCategory,
    LipidLevel, LipidSpecies, LipidSpeciesInfo
)
from pyliquid.formula import Formula
from pyliquid.errors import LevelTooLowError, LipidSemanticError, UnknownNameError


def _pc(sn1, sn2):
    return LipidSpecies(Headgroup('PC'), [
        FattyAcid(sn1[0], DoubleBonds(sn1[1], sn1[2]), sn_position=1),
        FattyAcid(sn2[0], DoubleBonds(sn2[1], sn2[2]), sn_position=2),
    ])


def test_double_bonds_position_count_mismatch():
    with pytest.raises(LipidSemanticError):
        DoubleBonds(2, {9: 'Z'})


def test_double_bonds_bad_geometry():
    with pytest.raises(LipidSemanticError):
        DoubleBonds(1, {9: 'X'})


def test_double_bonds_duplicate_position():
    with pytest.raises(LipidSemanticError):
        DoubleBonds(2, [(9, 'Z'), (9, 'E')])


def test_chain_capacity():
    FattyAcid(2, DoubleBonds(1))
    with pytest.raises(LipidSemanticError) as excinfo:
        FattyAcid(16, DoubleBonds(16))
    assert excinfo.value.rule == 'db_count'


def test_chain_position_out_of_range():
    with pytest.raises(LipidSemanticError):
        FattyAcid(18, DoubleBonds(1, {18: 'Z'}))
    with pytest.raises(LipidSemanticError):
        FattyAcid(18, functional_groups=[FunctionalGroup.from_registry('OH', position=19)])


def test_chain_elements():
    # ester linked 16:0 is C16H31O (acyl)
    assert FattyAcid(16).get_elements() == {'C': 16, 'H': 31, 'O': 1}
    assert FattyAcid(16, bond_type=ChainBondType.ETHER).get_elements() == {'C': 16, 'H': 33}
    assert FattyAcid(16, bond_type=ChainBondType.PLASMENYL).get_elements() == {'C': 16, 'H': 31}
    assert FattyAcid(18, DoubleBonds(1), bond_type=ChainBondType.LCB).get_elements() == {'C': 18, 'H': 35, 'N': 1}
    assert FattyAcid.placeholder().get_elements() == {'H': 1}


def test_chain_with_functional_groups():
    chain = FattyAcid(18, functional_groups=[FunctionalGroup.from_registry('OH', position=12)])
    assert chain.get_elements() == {'C': 18, 'H': 35, 'O': 2}
    assert chain.hydroxyl_count == 1
    assert chain.to_string(LipidLevel.FULL_STRUCTURE) == '18:0;12OH'
    assert chain.to_string(LipidLevel.SN_POSITION) == '18:0;O'


def test_nested_functional_group_elements():
    acyl = FunctionalGroup.from_registry('FA', position=12, children=[FattyAcid(16)])
    # own delta (+O -H) plus the acyl chain
    assert acyl.get_gain() == {'C': 16, 'H': 31, 'O': 2}
    assert acyl.get_loss() == {'H': 1}
    chain = FattyAcid(18, functional_groups=[acyl])
    assert chain.get_elements() == {'C': 34, 'H': 65, 'O': 3}
    assert chain.to_string(LipidLevel.FULL_STRUCTURE) == '18:0;12(FA 16:0)'


def test_functional_group_copy_is_deep():
    group = FunctionalGroup.from_registry('FA', position=12, children=[FattyAcid(16)])
    copied = group.copy()
    group.children[0].carbons = 18
    group.position = 10
    assert copied.children[0].carbons == 16
    assert copied.position == 12


def test_strip_leaves_source_untouched():
    acyl = FunctionalGroup.from_registry('FA', position=12, stereo='R', children=[FattyAcid(16)])
    stripped = acyl.strip(LipidLevel.SN_POSITION)
    assert (stripped.position, stripped.stereo) == (None, None)
    assert (acyl.position, acyl.stereo) == (12, 'R')
    assert stripped.children[0] is not acyl.children[0]


def test_unknown_functional_group():
    with pytest.raises(UnknownNameError) as excinfo:
        FunctionalGroup.from_registry('XYZ')
    assert excinfo.value.kind == 'FunctionalGroup'


def test_merge_functional_groups_rendering():
    groups = [FunctionalGroup.from_registry('OH', position=3), FunctionalGroup.from_registry('OH', position=1),
              FunctionalGroup.from_registry('oxo', position=5)]
    chain = FattyAcid(18, functional_groups=groups)
    assert chain.to_string(LipidLevel.FULL_STRUCTURE) == '18:0;1OH,3OH,5oxo'
    assert chain.to_string(LipidLevel.MOLECULAR_SPECIES) == '18:0;O2;oxo'


def test_headgroup():
    hg = Headgroup('LysoPC')
    assert hg.lipid_class == 'LPC'
    assert hg.category is LipidCategory.GP
    assert hg.slots == 2
    assert hg.chain_count == 1
    with pytest.raises(UnknownNameError) as excinfo:
        Headgroup('XYZ')
    assert excinfo.value.kind == 'HeadGroup'
    assert excinfo.value.value == 'XYZ'


def test_headgroup_decorators():
    hg = Headgroup('Cer', ['Gal'])
    assert hg.to_string(LipidLevel.STRUCTURE_DEFINED) == 'Gal-Cer'
    assert hg.to_string(LipidLevel.SPECIES) == 'Hex-Cer'
    with pytest.raises(UnknownNameError):
        Headgroup('Cer', ['Foo'])


def test_species_level_lipid():
    lipid = LipidSpecies(Headgroup('PC'), info=LipidSpeciesInfo(34, 1, [ChainBondType.ESTER] * 2))
    assert lipid.level == LipidLevel.SPECIES
    assert lipid.get_lipid_string() == 'PC 34:1'
    assert str(lipid.get_elements()) == 'C42H82NO8P'


def test_lipid_requires_composition():
    with pytest.raises(LipidSemanticError):
        LipidSpecies(Headgroup('PC'))


def test_level_inference():
    assert _pc((16, 0, None), (18, 1, None)).level == LipidLevel.SN_POSITION
    assert _pc((16, 0, None), (18, 1, {9: ''})).level == LipidLevel.STRUCTURE_DEFINED
    assert _pc((16, 0, None), (18, 1, {9: 'Z'})).level == LipidLevel.FULL_STRUCTURE
    molecular = LipidSpecies(Headgroup('PC'), [FattyAcid(16), FattyAcid(18, DoubleBonds(1, {9: 'Z'}))])
    assert molecular.level == LipidLevel.MOLECULAR_SPECIES
    stereo = LipidSpecies(Headgroup('FA'), [
        FattyAcid(18, functional_groups=[FunctionalGroup.from_registry('OH', position=12, stereo='R')],
                  sn_position=1)
    ])
    assert stereo.level == LipidLevel.COMPLETE_STRUCTURE
    assert stereo.get_lipid_string() == 'FA 18:0;12OH[R]'


def test_declared_level_above_information():
    with pytest.raises(LipidSemanticError):
        LipidSpecies(Headgroup('PC'), [FattyAcid(16), FattyAcid(18)], level=LipidLevel.SN_POSITION)


def test_too_many_chains():
    with pytest.raises(LipidSemanticError):
        LipidSpecies(Headgroup('PC'), [FattyAcid(16), FattyAcid(18), FattyAcid(20)])


def test_downgrade_renderings():
    lipid = _pc((16, 0, None), (18, 1, {9: 'Z'}))
    expected = {
        LipidLevel.FULL_STRUCTURE: 'PC 16:0/18:1(9Z)',
        LipidLevel.STRUCTURE_DEFINED: 'PC 16:0/18:1(9)',
        LipidLevel.SN_POSITION: 'PC 16:0/18:1',
        LipidLevel.MOLECULAR_SPECIES: 'PC 16:0_18:1',
        LipidLevel.SPECIES: 'PC 34:1',
        LipidLevel.CLASS: 'PC',
        LipidLevel.CATEGORY: 'GP',
    }
    for level, name in expected.items():
        assert lipid.get_lipid_string(level) == name
        assert lipid.downgrade(level).level == level


def test_downgrade_keeps_formula():
    lipid = _pc((16, 0, None), (18, 1, {9: 'Z'}))
    for level in (level for level in LipidLevel if level <= lipid.level):
        assert lipid.downgrade(level).get_elements() == lipid.get_elements()


def test_downgrade_idempotent():
    lipid = _pc((18, 1, {9: 'Z'}), (16, 0, None))
    for level in (level for level in LipidLevel if level <= lipid.level):
        once = lipid.downgrade(level)
        assert once.downgrade(level) == once


def test_downgrade_does_not_modify_source():
    lipid = _pc((16, 0, None), (18, 1, {9: 'Z'}))
    lipid.downgrade(LipidLevel.MOLECULAR_SPECIES)
    assert lipid.get_lipid_string() == 'PC 16:0/18:1(9Z)'
    assert lipid.chains[1].sn_position == 2


def test_upgrade_fails():
    lipid = LipidSpecies(Headgroup('PC'), [FattyAcid(16), FattyAcid(18)])
    with pytest.raises(LevelTooLowError) as excinfo:
        lipid.downgrade(LipidLevel.SN_POSITION)
    assert excinfo.value.current == LipidLevel.MOLECULAR_SPECIES
    assert excinfo.value.requested == LipidLevel.SN_POSITION


def test_molecular_species_chain_order():
    lipid = LipidSpecies(Headgroup('TG'), [FattyAcid(18, DoubleBonds(2)), FattyAcid(16), FattyAcid(18, DoubleBonds(1))])
    assert lipid.get_lipid_string() == 'TG 16:0_18:1_18:2'


def test_mass_increases_by_ch2_per_carbon():
    ch2 = Formula({'C': 1, 'H': 2}).mass()
    previous = None
    for carbons in range(12, 24):
        mass = LipidAdduct(_pc((carbons, 0, None), (18, 1, {9: 'Z'}))).get_mass()
        if previous is not None:
            assert mass > previous
            assert mass - previous == pytest.approx(ch2, abs=1e-6)
        previous = mass


def test_adduct():
    adduct = Adduct([(1, 1, 'H', Formula({'H': 1}))])
    assert adduct.to_string() == '[M+H]1+'
    lipid = LipidAdduct(LipidSpecies(Headgroup('PC'), info=LipidSpeciesInfo(34, 1, [ChainBondType.ESTER] * 2)),
                        adduct)
    assert str(lipid.get_sum_formula()) == 'C42H83NO8P'
    assert lipid.get_neutral_mass() == pytest.approx(759.5778, abs=1e-4)
    assert lipid.get_mass() == pytest.approx(760.5851, abs=1e-4)
    assert lipid.get_lipid_string() == 'PC 34:1[M+H]1+'
    assert lipid.charge == 1


def test_adduct_doubly_charged():
    adduct = Adduct([(-1, 2, 'H', Formula({'H': 1}))], charge=2, charge_sign=-1)
    assert adduct.to_string() == '[M-2H]2-'
    assert adduct.signed_charge == -2
    with pytest.raises(LipidSemanticError):
        Adduct([], charge=0)


def test_render_above_level_fails():
    lipid = LipidSpecies(Headgroup('PC'), info=LipidSpeciesInfo(34, 1, [ChainBondType.ESTER] * 2))
    with pytest.raises(LevelTooLowError):
        lipid.get_lipid_string(LipidLevel.MOLECULAR_SPECIES)
