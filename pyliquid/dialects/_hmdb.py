"""
pyliquid/dialects/_hmdb.py

    HMDB notation, e.g.:

        PC(16:0/18:1(9Z))
        LysoPC(18:1(9Z)/0:0)
        PC(o-16:0/18:1(9Z))
        TG(16:0/18:1(9Z)/18:2(9Z,12Z))[iso6]
        DG(16:0/18:1(9Z)/0:0)[rac]
        PE(16:0/20:4(5Z,8Z,11Z,14Z))[U]

    The isomer suffixes say how certain the sn assignment is: [isoN] with N > 1 and [U] mean the chains could be in
    any order, [rac] (racemic at sn-1/sn-3) and [iso1] keep the written order.
"""


from pyliquid.dialects._handler import COMMON_RULES, EventHandler, assemble_lipid
from pyliquid.dialects._lipidmaps import FOLDS
from pyliquid.grammar import Grammar


_GRAMMAR = """
lipid : species isomer_info? ;
species : class_name '(' chain_list ')' ;
isomer_info : '[iso' number ']' | '[rac]' | '[U]' ;

chain : chain_prefix? carbons ':' db_count db_positions? functional_groups? ;
chain_prefix : 'O-' | 'P-' | 'o-' | 'm' | 'd' | 't' ;
functional_groups : '(' lm_group (',' lm_group)* ')' ;
lm_group : number? fg_name ;
""" + COMMON_RULES


def _fold_lipid(handler, node):
    isomer_info = node.child('isomer_info')
    sn_known = handler.fold(isomer_info) if isomer_info is not None else True
    class_name, drafts, separator = handler.fold(node.child('species'))
    return assemble_lipid(class_name, drafts, separator, sn_known=sn_known)


def _fold_isomer_info(handler, node):
    """ whether the written chain order is the sn order """
    number = node.child('number')
    if number is not None:
        return int(number.text) <= 1
    return node.text == '[rac]'


def _fold_chain_prefix(handler, node):
    return 'O-' if node.text == 'o-' else node.text


_FOLDS = dict(FOLDS, **{
    'lipid': _fold_lipid,
    'isomer_info': _fold_isomer_info,
    'chain_prefix': _fold_chain_prefix,
})


def hmdb_handler():
    """
    event handler for the HMDB notation

    Returns
    -------
    handler : ``pyliquid.dialects._handler.EventHandler``
        HMDB handler
    """
    return EventHandler('hmdb', Grammar('hmdb', _GRAMMAR), _FOLDS)
