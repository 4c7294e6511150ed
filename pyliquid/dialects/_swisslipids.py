"""
pyliquid/dialects/_swisslipids.py

    SwissLipids notation, parenthesized names only, e.g.:

        PC(16:0/18:1(9Z))
        PE(O-18:1(9Z)/22:6(4Z,7Z,10Z,13Z,16Z,19Z))
        Cer(d18:1(4E)/24:0(2OH))
        TG(16:0_18:1_18:2)
"""


from pyliquid.dialects._handler import COMMON_RULES, EventHandler
from pyliquid.dialects._lipidmaps import FOLDS
from pyliquid.grammar import Grammar


_GRAMMAR = """
lipid : species ;
species : class_name '(' chain_list ')' ;

chain : chain_prefix? carbons ':' db_count db_positions? functional_groups? ;
chain_prefix : 'O-' | 'P-' | 'm' | 'd' | 't' ;
functional_groups : '(' lm_group (',' lm_group)* ')' ;
lm_group : number? fg_name ;
""" + COMMON_RULES


def swisslipids_handler():
    """
    event handler for the SwissLipids notation

    Returns
    -------
    handler : ``pyliquid.dialects._handler.EventHandler``
        SwissLipids handler
    """
    return EventHandler('swisslipids', Grammar('swisslipids', _GRAMMAR), FOLDS)
