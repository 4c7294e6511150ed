"""
pyliquid/dialects/_lipidmaps.py

    LIPID MAPS notation, e.g.:

        PC(16:0/18:1(9Z))
        PC(34:1)
        PC 34:1
        PC(O-16:0/18:1)
        Cer(d18:1(4E)/16:0)
        Cer(t18:0/24:0(2OH))
        PC(16:0/18:1(9Z))[M+H]+
"""


from pyliquid.dialects._handler import COMMON_FOLDS, COMMON_RULES, EventHandler, assemble_lipid
from pyliquid.grammar import Grammar
from pyliquid.lipids import FunctionalGroup


_GRAMMAR = """
lipid : species adduct_info? ;
species : class_name '(' chain_list ')' | class_name ' ' chain_list ;

chain : chain_prefix? carbons ':' db_count db_positions? functional_groups? ;
chain_prefix : 'O-' | 'P-' | 'm' | 'd' | 't' ;
functional_groups : '(' lm_group (',' lm_group)* ')' ;
lm_group : number? fg_name ;
""" + COMMON_RULES


def fold_lipid(handler, node):
    """ folds the 'lipid' root (species plus optional adduct) of the LIPID MAPS style grammars """
    adduct_node = node.child('adduct_info')
    adduct = handler.fold(adduct_node) if adduct_node is not None else None
    class_name, drafts, separator = handler.fold(node.child('species'))
    return assemble_lipid(class_name, drafts, separator, adduct=adduct)


def fold_species(handler, node):
    drafts, separator = handler.fold(node.child('chain_list'))
    return handler.fold(node.child('class_name')), drafts, separator


def fold_functional_groups(handler, node):
    return [handler.fold(group) for group in node.children_of('lm_group')]


def fold_lm_group(handler, node):
    number = node.child('number')
    return FunctionalGroup.from_registry(node.child('fg_name').text,
                                         position=int(number.text) if number is not None else None)


FOLDS = dict(COMMON_FOLDS, **{
    'lipid': fold_lipid,
    'species': fold_species,
    'functional_groups': fold_functional_groups,
    'lm_group': fold_lm_group,
})


def lipidmaps_handler():
    """
    event handler for the LIPID MAPS notation

    Returns
    -------
    handler : ``pyliquid.dialects._handler.EventHandler``
        LIPID MAPS handler
    """
    return EventHandler('lipidmaps', Grammar('lipidmaps', _GRAMMAR), FOLDS)
