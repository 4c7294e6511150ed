"""
pyliquid/dialects/_fatty_acid.py

    systematic (IUPAC) and trivial names of free fatty acids, e.g.:

        hexadecanoic acid
        octadec-9-enoic acid
        (9Z,12Z)-octadeca-9,12-dienoic acid
        12-hydroxyoctadecanoic acid
        (9Z,12R)-12-hydroxyoctadec-9-enoic acid
        oleic acid

    Names are folded into FA lipids with the single chain at sn-1.
"""


import string

from pyliquid.dialects._handler import EventHandler, literal_alternatives
from pyliquid.errors import LipidSemanticError
from pyliquid.grammar import Grammar
from pyliquid.lipids import DoubleBonds, FattyAcid, FunctionalGroup, Headgroup, LipidAdduct, LipidSpecies


# chain length stems
_STEMS = {
    'meth': 1, 'eth': 2, 'prop': 3, 'but': 4, 'pent': 5, 'hex': 6, 'hept': 7, 'oct': 8, 'non': 9, 'dec': 10,
    'undec': 11, 'dodec': 12, 'tridec': 13, 'tetradec': 14, 'pentadec': 15, 'hexadec': 16, 'heptadec': 17,
    'octadec': 18, 'nonadec': 19, 'icos': 20, 'eicos': 20, 'henicos': 21, 'docos': 22, 'tricos': 23,
    'tetracos': 24, 'pentacos': 25, 'hexacos': 26, 'heptacos': 27, 'octacos': 28, 'nonacos': 29, 'triacont': 30,
}

# multiplying prefixes
_MULTIPLIERS = {'di': 2, 'tri': 3, 'tetra': 4, 'penta': 5, 'hexa': 6}

# substituent prefix -> functional group name
_SUBSTITUENTS = {
    'hydroxy': 'OH',
    'oxo': 'oxo',
    'methyl': 'Me',
    'ethyl': 'Et',
    'amino': 'NH2',
    'hydroperoxy': 'OOH',
    'epoxy': 'Ep',
    'carboxy': 'COOH',
    'sulfanyl': 'SH',
    'nitro': 'NO2',
    'fluoro': 'F',
    'chloro': 'Cl',
    'bromo': 'Br',
    'iodo': 'I',
}

# trivial name -> (carbons, double bond positions with geometry)
_TRIVIAL_NAMES = {
    'butyric': (4, []),
    'caproic': (6, []),
    'caprylic': (8, []),
    'capric': (10, []),
    'lauric': (12, []),
    'myristic': (14, []),
    'palmitic': (16, []),
    'palmitoleic': (16, [(9, 'Z')]),
    'stearic': (18, []),
    'oleic': (18, [(9, 'Z')]),
    'elaidic': (18, [(9, 'E')]),
    'vaccenic': (18, [(11, 'E')]),
    'linoleic': (18, [(9, 'Z'), (12, 'Z')]),
    'linolenic': (18, [(9, 'Z'), (12, 'Z'), (15, 'Z')]),
    'arachidic': (20, []),
    'arachidonic': (20, [(5, 'Z'), (8, 'Z'), (11, 'Z'), (14, 'Z')]),
    'behenic': (22, []),
    'erucic': (22, [(13, 'Z')]),
    'lignoceric': (24, []),
    'nervonic': (24, [(15, 'Z')]),
    'cerotic': (26, []),
}


_GRAMMAR = """
fatty_acid : systematic_name | trivial_name ;
systematic_name : configuration? substituents? stem unsaturation 'oic acid' ;
configuration : '(' configuration_entry (',' configuration_entry)* ')-' ;
configuration_entry : number configuration_label ;
configuration_label : 'E' | 'Z' | 'R' | 'S' ;
substituents : substituent ('-' substituent)* ;
substituent : locants '-' multiplier? substituent_name ;
substituent_name : {substituents} ;
stem : {stems} ;
unsaturation : 'an' | 'a'? '-' locants '-' multiplier? 'en' ;
locants : number (',' number)* ;
multiplier : {multipliers} ;
trivial_name : trivial ' acid' ;
trivial : {trivial} ;
number : digit+ ;
digit : {digits} ;
""".format(substituents=literal_alternatives(_SUBSTITUENTS), stems=literal_alternatives(_STEMS),
           multipliers=literal_alternatives(_MULTIPLIERS), trivial=literal_alternatives(_TRIVIAL_NAMES),
           digits=literal_alternatives(string.digits))


def _fatty_acid_lipid(chain):
    return LipidAdduct(LipidSpecies(Headgroup('FA'), [chain]))


def _fold_fatty_acid(handler, node):
    return handler.fold(node.children[0])


def _fold_systematic_name(handler, node):
    carbons = handler.fold(node.child('stem'))
    db_positions = handler.fold(node.child('unsaturation'))
    substituents = node.child('substituents')
    groups = handler.fold(substituents) if substituents is not None else []
    configuration = node.child('configuration')
    labels = handler.fold(configuration) if configuration is not None else {}
    geometry = {}
    for position, label in labels.items():
        if label in 'EZ':
            if position not in db_positions:
                msg = 'geometry {} given for position {} which has no double bond'
                raise LipidSemanticError('configuration', msg.format(label, position))
            geometry[position] = label
        else:
            targets = [group for group in groups if group.position == position]
            if not targets:
                msg = 'configuration {} given for position {} which has no substituent'
                raise LipidSemanticError('configuration', msg.format(label, position))
            for group in targets:
                group.stereo = label
    double_bonds = DoubleBonds(len(db_positions), [(p, geometry.get(p, '')) for p in db_positions])
    return _fatty_acid_lipid(FattyAcid(carbons, double_bonds=double_bonds, functional_groups=groups,
                                       sn_position=1))


def _fold_configuration(handler, node):
    labels = {}
    for entry in node.children_of('configuration_entry'):
        position = int(entry.child('number').text)
        if position in labels:
            msg = 'position {} is configured more than once'
            raise LipidSemanticError('configuration', msg.format(position))
        labels[position] = entry.child('configuration_label').text
    return labels


def _check_multiplier(node, locants):
    multiplier = node.child('multiplier')
    expected = _MULTIPLIERS[multiplier.text] if multiplier is not None else 1
    if len(locants) != expected:
        msg = '{} locant(s) given for multiplier "{}"'
        raise LipidSemanticError(node.rule, msg.format(len(locants), multiplier.text if multiplier else ''))


def _fold_substituents(handler, node):
    groups = []
    for substituent in node.children_of('substituent'):
        groups.extend(handler.fold(substituent))
    return groups


def _fold_substituent(handler, node):
    locants = handler.fold(node.child('locants'))
    _check_multiplier(node, locants)
    name = _SUBSTITUENTS[node.child('substituent_name').text]
    return [FunctionalGroup.from_registry(name, position=position) for position in locants]


def _fold_unsaturation(handler, node):
    """ double bond positions, empty for a saturated chain ('an') """
    if node.text == 'an':
        return []
    locants = handler.fold(node.child('locants'))
    _check_multiplier(node, locants)
    return locants


def _fold_locants(handler, node):
    return [int(number.text) for number in node.children_of('number')]


def _fold_trivial_name(handler, node):
    carbons, db_positions = _TRIVIAL_NAMES[node.child('trivial').text]
    double_bonds = DoubleBonds(len(db_positions), db_positions)
    return _fatty_acid_lipid(FattyAcid(carbons, double_bonds=double_bonds, sn_position=1))


_FOLDS = {
    'fatty_acid': _fold_fatty_acid,
    'systematic_name': _fold_systematic_name,
    'configuration': _fold_configuration,
    'stem': lambda handler, node: _STEMS[node.text],
    'substituents': _fold_substituents,
    'substituent': _fold_substituent,
    'unsaturation': _fold_unsaturation,
    'locants': _fold_locants,
    'trivial_name': _fold_trivial_name,
}


def fatty_acid_handler():
    """
    event handler for fatty acid names

    Returns
    -------
    handler : ``pyliquid.dialects._handler.EventHandler``
        fatty acid handler
    """
    return EventHandler('fatty_acid', Grammar('fatty_acid', _GRAMMAR), _FOLDS)
