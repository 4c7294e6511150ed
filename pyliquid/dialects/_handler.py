"""
pyliquid/dialects/_handler.py

    internal module with the event handler machinery shared by all of the dialects

    An event handler is a grammar plus a table mapping rule names to fold functions ``fold(handler, node)``. Parsing
    runs the chart parser and then folds the root of the parse tree, each fold function decides which of its children
    to fold (through ``handler.fold``) and what to build from them. Handlers keep no per-call state.

    Lipid dialects fold chains into "drafts" (plain dicts) first, ``assemble_lipid`` then turns a class name and a
    list of drafts into a ``LipidAdduct`` once it knows the lipid class, i.e. once it knows which chain is the long
    chain base, how many chain positions there are and whether the name describes a lyso lipid.
"""


import string

from pyliquid._elements import element_symbols
from pyliquid.errors import LipidSyntaxError, LipidSemanticError, HandlerContractError, NestingTooDeepError
from pyliquid.formula import Formula
from pyliquid.grammar import ChartParser, GrammarDepthExceeded, GrammarMismatch
from pyliquid.lipids import (
    Adduct, ChainBondType, DoubleBonds, FattyAcid, FunctionalGroup, Headgroup, LipidAdduct, LipidSpecies,
    LipidSpeciesInfo, bond_type_from_prefix
)


def literal_alternatives(literals):
    """ grammar alternatives matching any of ``literals`` """
    return ' | '.join("'{}'".format(literal.replace('\\', '\\\\').replace("'", "\\'")) for literal in literals)


# rules shared by the lipid dialects
COMMON_RULES = """
number : digit+ ;
digit : {digits} ;
letter : {letters} ;
word : word_char+ ;
word_char : letter | digit ;
fg_name : letter word_char* ;
class_name : word ;

chain_list : sn_chains | molecular_chains | chain ;
sn_chains : chain ('/' chain)+ ;
molecular_chains : chain ('_' chain)+ ;
carbons : number ;
db_count : number ;
db_positions : '(' db_position (',' db_position)* ')' ;
db_position : number geometry? ;
geometry : 'E' | 'Z' ;
stereo_config : 'R' | 'S' ;

adduct_info : '[M' adduct_term+ ']' charge? charge_sign ;
adduct_term : adduct_sign number? adduct_formula ;
adduct_sign : '+' | '-' ;
adduct_formula : element_count+ ;
element_count : element number? ;
element : {elements} ;
charge : number ;
charge_sign : '+' | '-' ;
""".format(digits=literal_alternatives(string.digits), letters=literal_alternatives(string.ascii_letters),
           elements=literal_alternatives(element_symbols()))


# hydroxylation prefixes of long chain bases: prefix -> (hydroxyl count, positions)
_LCB_HYDROXYLS = {
    'm': (1, [3]),
    'd': (2, [1, 3]),
    't': (3, [1, 3, 4]),
}


class EventHandler():
    """
    folds parse trees of one dialect into domain objects

    Parameters
    ----------
    dialect : ``str``
        dialect name
    grammar : ``pyliquid.grammar.Grammar``
        dialect grammar
    folds : ``dict(str:func)``
        fold function for each rule the handler folds, every key must be a rule of the grammar
    """

    def __init__(self, dialect, grammar, folds):
        self.dialect = dialect
        self.grammar = grammar
        self.parser = ChartParser(grammar)
        unknown = set(folds) - set(grammar.rule_names())
        if unknown:
            msg = 'EventHandler: __init__: fold functions for rules not in the {} grammar: {}'
            raise HandlerContractError(msg.format(dialect, sorted(unknown)))
        self._folds = dict(folds)

    def fold(self, node):
        """
        folds a parse tree node with the fold function registered for its rule

        Parameters
        ----------
        node : ``pyliquid.grammar.ParseTree``
            node to fold

        Returns
        -------
        value : ``object``
            whatever the fold function builds
        """
        fold = self._folds.get(node.rule)
        if fold is None:
            msg = 'EventHandler: fold: {} handler has no fold function for rule "{}"'
            raise HandlerContractError(msg.format(self.dialect, node.rule))
        return fold(self, node)

    def parse(self, text):
        """
        parses ``text`` and folds the resulting parse tree

        Parameters
        ----------
        text : ``str``
            input text

        Returns
        -------
        value : ``object``
            folded parse tree (a ``LipidAdduct`` for lipid dialects)
        """
        try:
            tree = self.parser.parse(text)
        except GrammarMismatch as err:
            raise LipidSyntaxError(self.dialect, err.position, err.rule, text) from None
        except GrammarDepthExceeded as err:
            raise NestingTooDeepError(self.dialect, err.position, err.rule, text, err.max_depth) from None
        return self.fold(tree)


def fold_text(handler, node):
    return node.text


def fold_number(handler, node):
    return int(node.text)


def fold_first_child(handler, node):
    return handler.fold(node.children[0])


def fold_db_positions(handler, node):
    return [handler.fold(child) for child in node.children_of('db_position')]


def fold_db_position(handler, node):
    geometry = node.child('geometry')
    return (int(node.child('number').text), geometry.text if geometry is not None else '')


def fold_chain(handler, node):
    """ folds a chain into a draft, the chain is only built once the lipid class is known """
    draft = {'prefix': '', 'carbons': 0, 'db': 0, 'db_positions': None, 'groups': []}
    keys = {
        'chain_prefix': 'prefix',
        'carbons': 'carbons',
        'db_count': 'db',
        'db_positions': 'db_positions',
        'functional_groups': 'groups',
    }
    for child in node.children:
        if child.rule not in keys:
            msg = 'fold_chain: unexpected child rule "{}" in {} chain'
            raise HandlerContractError(msg.format(child.rule, handler.dialect))
        draft[keys[child.rule]] = handler.fold(child)
    return draft


def fold_chain_list(handler, node):
    """ returns the chain drafts and the separator ('/' for sn positions, '_' for molecular, None for one chain) """
    inner = node.children[0]
    if inner.rule == 'sn_chains':
        return [handler.fold(chain) for chain in inner.children_of('chain')], '/'
    if inner.rule == 'molecular_chains':
        return [handler.fold(chain) for chain in inner.children_of('chain')], '_'
    return [handler.fold(inner)], None


def fold_adduct_info(handler, node):
    terms = [handler.fold(term) for term in node.children_of('adduct_term')]
    charge = node.child('charge')
    charge_sign = 1 if node.child('charge_sign').text == '+' else -1
    return Adduct(terms, charge=int(charge.text) if charge is not None else 1, charge_sign=charge_sign)


def fold_adduct_term(handler, node):
    multiplier = node.child('number')
    formula_node = node.child('adduct_formula')
    sign = 1 if node.child('adduct_sign').text == '+' else -1
    return (sign, int(multiplier.text) if multiplier is not None else 1, formula_node.text,
            handler.fold(formula_node))


def fold_element_counts(handler, node):
    """ folds a run of element_count nodes into a Formula """
    counts = {}
    for element_count in node.children_of('element_count'):
        number = element_count.child('number')
        element = element_count.child('element').text
        counts[element] = counts.get(element, 0) + (int(number.text) if number is not None else 1)
    return Formula(counts)


# fold functions every lipid dialect registers
COMMON_FOLDS = {
    'number': fold_number,
    'class_name': fold_text,
    'chain_list': fold_chain_list,
    'chain': fold_chain,
    'chain_prefix': fold_text,
    'carbons': fold_number,
    'db_count': fold_number,
    'db_positions': fold_db_positions,
    'db_position': fold_db_position,
    'stereo_config': fold_text,
    'adduct_info': fold_adduct_info,
    'adduct_term': fold_adduct_term,
    'adduct_formula': fold_element_counts,
}


def _is_empty(draft):
    return (draft['carbons'] == 0 and draft['db'] == 0 and not draft['prefix'] and not draft['groups']
            and not draft['db_positions'])


def _lcb_hydroxyl_groups(prefix, draft):
    """ hydroxyl groups implied by an m/d/t prefix, positioned when the double bond positions are known """
    count, positions = _LCB_HYDROXYLS[prefix]
    if draft['db'] == 0 or draft['db_positions']:
        return [FunctionalGroup.from_registry('OH', position=position) for position in positions]
    return [FunctionalGroup.from_registry('OH', count=count)]


def _chain_bond_type(headgroup, prefix, is_lcb):
    if prefix in _LCB_HYDROXYLS and not is_lcb:
        msg = 'hydroxylation prefix "{}" is only valid on the long chain base of a sphingolipid'
        raise LipidSemanticError('chain_prefix', msg.format(prefix))
    if is_lcb:
        if prefix in ('O-', 'P-'):
            raise LipidSemanticError('chain_prefix', 'a long chain base cannot be ether linked')
        return ChainBondType.LCB
    if headgroup.has_lcb:
        if prefix:
            raise LipidSemanticError('chain_prefix', 'the N-acyl chain of a sphingolipid cannot be ether linked')
        return ChainBondType.AMIDE
    return bond_type_from_prefix(prefix)


def build_chain(draft, bond_type=ChainBondType.ESTER, sn_position=0, extra_groups=None):
    """
    builds a chain from a draft

    Parameters
    ----------
    draft : ``dict(...)``
        chain draft from ``fold_chain``
    bond_type : ``pyliquid.lipids.ChainBondType``, default=ESTER
        bond type of the chain
    sn_position : ``int``, default=0
        sn position, 0 for unassigned
    extra_groups : ``list(pyliquid.lipids.FunctionalGroup)``, optional
        groups to add on top of the ones in the draft

    Returns
    -------
    chain : ``pyliquid.lipids.FattyAcid``
        the chain
    """
    if _is_empty(draft):
        return FattyAcid.placeholder(sn_position)
    double_bonds = DoubleBonds(draft['db'], draft['db_positions'])
    return FattyAcid(draft['carbons'], double_bonds=double_bonds, bond_type=bond_type,
                     functional_groups=draft['groups'] + (extra_groups or []), sn_position=sn_position)


def _lipid_chain(headgroup, draft, sn_position, is_first):
    if _is_empty(draft):
        return FattyAcid.placeholder(sn_position)
    is_lcb = headgroup.has_lcb and is_first
    prefix = draft['prefix']
    bond_type = _chain_bond_type(headgroup, prefix, is_lcb)
    extra = _lcb_hydroxyl_groups(prefix, draft) if prefix in _LCB_HYDROXYLS else []
    return build_chain(draft, bond_type=bond_type, sn_position=sn_position, extra_groups=extra)


def _species_info(headgroup, draft):
    """ sum composition from a single draft written for a class with more than one chain """
    if draft['db_positions']:
        raise LipidSemanticError('db_positions', 'double bond positions require individual chains')
    prefix = draft['prefix']
    first = _chain_bond_type(headgroup, prefix, headgroup.has_lcb)
    other = ChainBondType.AMIDE if headgroup.has_lcb else ChainBondType.ESTER
    groups = list(draft['groups'])
    if prefix in _LCB_HYDROXYLS:
        groups.append(FunctionalGroup.from_registry('OH', count=_LCB_HYDROXYLS[prefix][0]))
    layout = [first] + [other] * (headgroup.chain_count - 1)
    return LipidSpeciesInfo(draft['carbons'], draft['db'], layout, groups)


def assemble_lipid(class_name, drafts, separator, decorators=None, adduct=None, sn_known=True):
    """
    builds a lipid from its class name and chain drafts

    Parameters
    ----------
    class_name : ``str``
        class abbreviation or synonym
    drafts : ``list(dict(...))``
        chain drafts in the order they were written
    separator : ``str``
        '/' when the chains were given with sn positions, '_' when given without, None for a single chain
    decorators : ``list(str)``, optional
        head group decorator names
    adduct : ``pyliquid.lipids.Adduct``, optional
        adduct
    sn_known : ``bool``, default=True
        False when the dialect marks the sn assignment of '/' separated chains as unknown

    Returns
    -------
    lipid : ``pyliquid.lipids.LipidAdduct``
        assembled lipid
    """
    headgroup = Headgroup(class_name, decorators)
    n_real = sum(1 for draft in drafts if not _is_empty(draft))
    lyso = headgroup.class_info['lyso']
    if separator is not None and lyso is not None and n_real < headgroup.chain_count:
        lyso_headgroup = Headgroup(lyso, decorators)
        if n_real == lyso_headgroup.chain_count:
            headgroup = lyso_headgroup
    if separator is None and headgroup.chain_count > 1:
        # a single composition for a multi chain class is the sum composition
        return LipidAdduct(LipidSpecies(headgroup, info=_species_info(headgroup, drafts[0])), adduct)
    if separator == '/' and sn_known:
        chains = [_lipid_chain(headgroup, draft, i + 1, i == 0) for i, draft in enumerate(drafts)]
        chains += [FattyAcid.placeholder(i + 1) for i in range(len(chains), headgroup.slots)]
    else:
        sn_position = 1 if separator is None and headgroup.slots == 1 else 0
        chains = [_lipid_chain(headgroup, draft, sn_position, i == 0) for i, draft in enumerate(drafts)]
    return LipidAdduct(LipidSpecies(headgroup, chains), adduct)
