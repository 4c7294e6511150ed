"""
pyliquid/dialects/_goslin.py

    Goslin notation (the shorthand nomenclature as it was before the 2020 update), e.g.:

        PC 34:1
        PC 16:0-18:1
        PE O-16:0_18:1
        PC 16:0/18:1(9Z)
        Cer 18:1;2/16:0
        Cer 18:1;3/24:0;1
        PC 16:0/18:1[M+H]1+

    Hydroxyl groups are only given as a count (';2'), chains without sn positions may be separated by '-' as well as
    '_'.
"""


from pyliquid.dialects._handler import COMMON_FOLDS, COMMON_RULES, EventHandler, assemble_lipid
from pyliquid.grammar import Grammar
from pyliquid.lipids import FunctionalGroup


_GRAMMAR = """
lipid : species adduct_info? ;
species : class_name ' ' chain_list | class_name ' ' dash_chains ;
dash_chains : chain ('-' chain)+ ;

chain : chain_prefix? carbons ':' db_count db_positions? functional_groups? ;
chain_prefix : 'O-' | 'P-' ;
functional_groups : ';' number ;
""" + COMMON_RULES


def _fold_lipid(handler, node):
    adduct_node = node.child('adduct_info')
    adduct = handler.fold(adduct_node) if adduct_node is not None else None
    class_name, drafts, separator = handler.fold(node.child('species'))
    return assemble_lipid(class_name, drafts, separator, adduct=adduct)


def _fold_species(handler, node):
    dash_chains = node.child('dash_chains')
    if dash_chains is not None:
        drafts, separator = [handler.fold(chain) for chain in dash_chains.children_of('chain')], '_'
    else:
        drafts, separator = handler.fold(node.child('chain_list'))
    return handler.fold(node.child('class_name')), drafts, separator


def _fold_functional_groups(handler, node):
    """ ';N' is the number of hydroxyl groups on the chain """
    count = handler.fold(node.child('number'))
    return [FunctionalGroup.from_registry('OH', count=count)] if count > 0 else []


_FOLDS = dict(COMMON_FOLDS, **{
    'lipid': _fold_lipid,
    'species': _fold_species,
    'functional_groups': _fold_functional_groups,
})


def goslin_handler():
    """
    event handler for the Goslin notation

    Returns
    -------
    handler : ``pyliquid.dialects._handler.EventHandler``
        Goslin handler
    """
    return EventHandler('goslin', Grammar('goslin', _GRAMMAR), _FOLDS)
