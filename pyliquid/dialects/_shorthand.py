"""
pyliquid/dialects/_shorthand.py

    shorthand notation (2020 update of the lipid shorthand nomenclature), e.g.:

        PC 34:1
        PC O-16:0_18:1
        PC 16:0/18:1(9Z)
        Cer 18:1(4E);1OH,3OH/16:0
        FA 18:1(9Z);12OH[R]
        FA 18:0;12(FA 16:0)
        Gal-Cer 18:1;O2/16:0
        PE 16:0/20:4;O[M-H]1-

    This is also the notation every lipid is written back out in.
"""


from pyliquid.dialects._handler import (
    COMMON_FOLDS, COMMON_RULES, EventHandler, assemble_lipid, build_chain, fold_first_child
)
from pyliquid.grammar import Grammar
from pyliquid.lipids import FunctionalGroup, bond_type_from_prefix


_GRAMMAR = """
lipid : species adduct_info? ;
species : head_group ' ' chain_list ;
head_group : decorator_list? class_name ;
decorator_list : (decorator '-')+ ;
decorator : word ;

chain : chain_prefix? carbons ':' db_count db_positions? functional_groups? ;
chain_prefix : 'O-' | 'P-' ;

functional_groups : fg_block+ ;
fg_block : ';' positioned_groups | ';' unpositioned_group ;
positioned_groups : positioned_group (',' positioned_group)* ;
positioned_group : number fg_body stereo? ;
fg_body : fg_name | '(' acyl_group ')' ;
acyl_group : 'FA ' chain ;
stereo : '[' stereo_config ']' ;
unpositioned_group : hydroxyl_group | '(' fg_name ')' number | '(' acyl_group ')' number? | fg_name ;
hydroxyl_group : 'O' number? ;
""" + COMMON_RULES


def _fold_lipid(handler, node):
    adduct_node = node.child('adduct_info')
    adduct = handler.fold(adduct_node) if adduct_node is not None else None
    class_name, decorators, drafts, separator = handler.fold(node.child('species'))
    return assemble_lipid(class_name, drafts, separator, decorators=decorators, adduct=adduct)


def _fold_species(handler, node):
    class_name, decorators = handler.fold(node.child('head_group'))
    drafts, separator = handler.fold(node.child('chain_list'))
    return class_name, decorators, drafts, separator


def _fold_head_group(handler, node):
    decorator_list = node.child('decorator_list')
    decorators = handler.fold(decorator_list) if decorator_list is not None else []
    return handler.fold(node.child('class_name')), decorators


def _fold_decorator_list(handler, node):
    return [decorator.text for decorator in node.children_of('decorator')]


def _fold_functional_groups(handler, node):
    groups = []
    for block in node.children_of('fg_block'):
        groups.extend(handler.fold(block))
    return groups


def _fold_positioned_groups(handler, node):
    return [handler.fold(group) for group in node.children_of('positioned_group')]


def _fold_positioned_group(handler, node):
    name, children = handler.fold(node.child('fg_body'))
    stereo = node.child('stereo')
    return FunctionalGroup.from_registry(name, position=int(node.child('number').text),
                                         stereo=handler.fold(stereo) if stereo is not None else None,
                                         children=children)


def _fold_fg_body(handler, node):
    acyl = node.child('acyl_group')
    if acyl is not None:
        return 'FA', [handler.fold(acyl)]
    return node.child('fg_name').text, None


def _fold_acyl_group(handler, node):
    draft = handler.fold(node.child('chain'))
    return build_chain(draft, bond_type=bond_type_from_prefix(draft['prefix']))


def _fold_unpositioned_group(handler, node):
    hydroxyl = node.child('hydroxyl_group')
    number = node.child('number')
    count = int(number.text) if number is not None else 1
    if hydroxyl is not None:
        return [handler.fold(hydroxyl)]
    acyl = node.child('acyl_group')
    if acyl is not None:
        return [FunctionalGroup.from_registry('FA', count=count, children=[handler.fold(acyl)])]
    return [FunctionalGroup.from_registry(node.child('fg_name').text, count=count)]


def _fold_hydroxyl_group(handler, node):
    number = node.child('number')
    return FunctionalGroup.from_registry('OH', count=int(number.text) if number is not None else 1)


_FOLDS = dict(COMMON_FOLDS, **{
    'lipid': _fold_lipid,
    'species': _fold_species,
    'head_group': _fold_head_group,
    'decorator_list': _fold_decorator_list,
    'functional_groups': _fold_functional_groups,
    'fg_block': fold_first_child,
    'positioned_groups': _fold_positioned_groups,
    'positioned_group': _fold_positioned_group,
    'fg_body': _fold_fg_body,
    'acyl_group': _fold_acyl_group,
    'stereo': lambda handler, node: handler.fold(node.child('stereo_config')),
    'unpositioned_group': _fold_unpositioned_group,
    'hydroxyl_group': _fold_hydroxyl_group,
})


def shorthand_handler():
    """
    event handler for the shorthand notation

    Returns
    -------
    handler : ``pyliquid.dialects._handler.EventHandler``
        shorthand handler
    """
    return EventHandler('shorthand', Grammar('shorthand', _GRAMMAR), _FOLDS)
