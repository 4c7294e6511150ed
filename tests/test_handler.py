"""
tests/test_handler.py

    tests for the event handler machinery shared by the dialects
"""


import pytest

from pyliquid.dialects import EventHandler, assemble_lipid
from pyliquid.dialects._handler import fold_first_child, fold_text
from pyliquid.errors import HandlerContractError, LipidSemanticError, LipidSyntaxError
from pyliquid.grammar import Grammar
from pyliquid.lipids import LipidLevel


def _draft(carbons, db=0, prefix='', db_positions=None):
    return {'prefix': prefix, 'carbons': carbons, 'db': db, 'db_positions': db_positions, 'groups': []}


def test_fold_table_must_match_grammar():
    with pytest.raises(HandlerContractError):
        EventHandler('test', Grammar('test', "s : 'a' ;"), {'t': fold_text})


def test_missing_fold_function():
    handler = EventHandler('test', Grammar('test', "s : t ; t : 'a' ;"), {'s': fold_first_child})
    with pytest.raises(HandlerContractError):
        handler.parse('a')


def test_syntax_error_translation():
    handler = EventHandler('test', Grammar('test', "s : 'ab' ;"), {'s': fold_text})
    assert handler.parse('ab') == 'ab'
    with pytest.raises(LipidSyntaxError) as excinfo:
        handler.parse('ax')
    assert excinfo.value.dialect == 'test'
    assert excinfo.value.position == 0
    assert excinfo.value.expected_rule == 's'


def test_assemble_species():
    lipid = assemble_lipid('PC', [_draft(34, 1)], None)
    assert lipid.level == LipidLevel.SPECIES


def test_assemble_species_rejects_positions():
    with pytest.raises(LipidSemanticError):
        assemble_lipid('PC', [_draft(34, 1, db_positions=[(9, 'Z')])], None)


def test_assemble_sn_padding():
    lipid = assemble_lipid('TG', [_draft(16), _draft(18)], '/')
    assert lipid.lipid_class == 'DG'
    assert [chain.sn_position for chain in lipid.lipid.chains] == [1, 2, 3]
    assert lipid.lipid.chains[2].is_placeholder


def test_assemble_sn_unknown():
    lipid = assemble_lipid('PC', [_draft(16), _draft(18)], '/', sn_known=False)
    assert lipid.level == LipidLevel.MOLECULAR_SPECIES


def test_assemble_single_slot_class():
    lipid = assemble_lipid('FA', [_draft(16)], None)
    assert lipid.lipid.chains[0].sn_position == 1


def test_assemble_lcb_prefix():
    lipid = assemble_lipid('SM', [_draft(18, 1, prefix='d'), _draft(16)], '/')
    assert lipid.get_lipid_string() == 'SM 18:1;O2/16:0'
