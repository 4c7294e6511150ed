"""
pyliquid/_registry.py

    internal module with the static lookup tables: lipid classes (Lipid MAPS classification), functional group
    templates and head group decorators

    Every lookup returns a fresh copy of the stored entry, callers are free to modify what they get back. A missing
    name raises ``UnknownNameError``, there are no default values.
"""


from copy import deepcopy

from pyliquid.errors import UnknownNameError


# Lipid MAPS category -> category abbreviation used by pyliquid.lipids.LipidCategory
_CATEGORY_ABBREVS = {
    'Fatty Acyls': 'FA',
    'Glycerolipids': 'GL',
    'Glycerophospholipids': 'GP',
    'Sphingolipids': 'SP',
    'Sterol Lipids': 'ST',
}


# category -> main class -> class abbreviation -> class info
# 'formula' is the head group formula, i.e. everything that is not part of the chains
# 'slots' is the number of chain positions (sn-1, sn-2, ...), 'chains' how many of them carry a real chain
# 'lcb' marks classes whose first chain is a long chain base (sphingoid base)
# 'lyso' names the class to use when fewer than 'chains' real chains are given with explicit positions
_LIPID_CLASSES = {
    'Fatty Acyls': {
        'Fatty Acids and Conjugates': {
            'FA': {
                'lm_id_prefix': 'LMFA01',
                'description': 'fatty acid',
                'synonyms': [],
                'formula': {'H': 1, 'O': 1},
                'slots': 1,
                'chains': 1,
                'lcb': False,
                'charge': 0,
                'ionization': 'neg',
                'lyso': None,
            },
        },
        'Fatty esters': {
            'CAR': {
                'lm_id_prefix': 'LMFA0707',
                'description': 'fatty acyl carnitine',
                'synonyms': ['AcCa'],
                'formula': {'C': 7, 'H': 14, 'N': 1, 'O': 3},
                'slots': 1,
                'chains': 1,
                'lcb': False,
                'charge': 0,
                'ionization': 'pos',
                'lyso': None,
            },
        },
        'Fatty amides': {
            'NAE': {
                'lm_id_prefix': 'LMFA0804',
                'description': 'N-acyl ethanolamine',
                'synonyms': [],
                'formula': {'C': 2, 'H': 6, 'N': 1, 'O': 1},
                'slots': 1,
                'chains': 1,
                'lcb': False,
                'charge': 0,
                'ionization': 'pos',
                'lyso': None,
            },
        },
    },
    'Glycerolipids': {
        'Monoradylglycerols': {
            'MG': {
                'lm_id_prefix': 'LMGL0101',
                'description': 'monoacylglycerol',
                'synonyms': ['MAG'],
                'formula': {'C': 3, 'H': 5, 'O': 3},
                'slots': 3,
                'chains': 1,
                'lcb': False,
                'charge': 0,
                'ionization': 'pos',
                'lyso': None,
            },
        },
        'Diradylglycerols': {
            'DG': {
                'lm_id_prefix': 'LMGL0201',
                'description': 'diacylglycerol',
                'synonyms': ['DAG'],
                'formula': {'C': 3, 'H': 5, 'O': 3},
                'slots': 3,
                'chains': 2,
                'lcb': False,
                'charge': 0,
                'ionization': 'pos',
                'lyso': 'MG',
            },
        },
        'Triradylglycerols': {
            'TG': {
                'lm_id_prefix': 'LMGL0301',
                'description': 'triacylglycerol',
                'synonyms': ['TAG'],
                'formula': {'C': 3, 'H': 5, 'O': 3},
                'slots': 3,
                'chains': 3,
                'lcb': False,
                'charge': 0,
                'ionization': 'pos',
                'lyso': 'DG',
            },
        },
        'Glycosyldiradylglycerols': {
            'MGDG': {
                'lm_id_prefix': 'LMGL0501',
                'description': 'monogalactosyldiacylglycerol',
                'synonyms': [],
                'formula': {'C': 9, 'H': 16, 'O': 8},
                'slots': 2,
                'chains': 2,
                'lcb': False,
                'charge': 0,
                'ionization': 'pos',
                'lyso': None,
            },
            'DGDG': {
                'lm_id_prefix': 'LMGL0501',
                'description': 'digalactosyldiacylglycerol',
                'synonyms': [],
                'formula': {'C': 15, 'H': 26, 'O': 13},
                'slots': 2,
                'chains': 2,
                'lcb': False,
                'charge': 0,
                'ionization': 'pos',
                'lyso': None,
            },
            'SQDG': {
                'lm_id_prefix': 'LMGL0501',
                'description': 'sulfoquinovosyldiacylglycerol',
                'synonyms': [],
                'formula': {'C': 9, 'H': 16, 'O': 10, 'S': 1},
                'slots': 2,
                'chains': 2,
                'lcb': False,
                'charge': 0,
                'ionization': 'neg',
                'lyso': None,
            },
        },
    },
    'Glycerophospholipids': {
        # ---------- PCs ----------
        'Glycerophosphocholines': {
            'PC': {
                'lm_id_prefix': 'LMGP0101',
                'description': 'phosphatidylcholine',
                'synonyms': ['GPCho'],
                'formula': {'C': 8, 'H': 18, 'N': 1, 'O': 6, 'P': 1},
                'slots': 2,
                'chains': 2,
                'lcb': False,
                'charge': 0,
                'ionization': 'pos',
                'lyso': 'LPC',
            },
            'LPC': {
                'lm_id_prefix': 'LMGP0105',
                'description': 'lysophosphatidylcholine',
                'synonyms': ['LysoPC', 'lysoPC'],
                'formula': {'C': 8, 'H': 18, 'N': 1, 'O': 6, 'P': 1},
                'slots': 2,
                'chains': 1,
                'lcb': False,
                'charge': 0,
                'ionization': 'pos',
                'lyso': None,
            },
        },
        # ---------- PEs ----------
        'Glycerophosphoethanolamines': {
            'PE': {
                'lm_id_prefix': 'LMGP0201',
                'description': 'phosphatidylethanolamine',
                'synonyms': ['GPEtn'],
                'formula': {'C': 5, 'H': 12, 'N': 1, 'O': 6, 'P': 1},
                'slots': 2,
                'chains': 2,
                'lcb': False,
                'charge': 0,
                'ionization': 'both',
                'lyso': 'LPE',
            },
            'LPE': {
                'lm_id_prefix': 'LMGP0205',
                'description': 'lysophosphatidylethanolamine',
                'synonyms': ['LysoPE', 'lysoPE'],
                'formula': {'C': 5, 'H': 12, 'N': 1, 'O': 6, 'P': 1},
                'slots': 2,
                'chains': 1,
                'lcb': False,
                'charge': 0,
                'ionization': 'both',
                'lyso': None,
            },
        },
        # ---------- PSs ----------
        'Glycerophosphoserines': {
            'PS': {
                'lm_id_prefix': 'LMGP0301',
                'description': 'phosphatidylserine',
                'synonyms': ['GPSer'],
                'formula': {'C': 6, 'H': 12, 'N': 1, 'O': 8, 'P': 1},
                'slots': 2,
                'chains': 2,
                'lcb': False,
                'charge': 0,
                'ionization': 'both',
                'lyso': 'LPS',
            },
            'LPS': {
                'lm_id_prefix': 'LMGP0305',
                'description': 'lysophosphatidylserine',
                'synonyms': ['LysoPS', 'lysoPS'],
                'formula': {'C': 6, 'H': 12, 'N': 1, 'O': 8, 'P': 1},
                'slots': 2,
                'chains': 1,
                'lcb': False,
                'charge': 0,
                'ionization': 'both',
                'lyso': None,
            },
        },
        # ---------- PGs ----------
        'Glycerophosphoglycerols': {
            'PG': {
                'lm_id_prefix': 'LMGP0401',
                'description': 'phosphatidylglycerol',
                'synonyms': ['GPGro'],
                'formula': {'C': 6, 'H': 13, 'O': 8, 'P': 1},
                'slots': 2,
                'chains': 2,
                'lcb': False,
                'charge': 0,
                'ionization': 'neg',
                'lyso': 'LPG',
            },
            'LPG': {
                'lm_id_prefix': 'LMGP0405',
                'description': 'lysophosphatidylglycerol',
                'synonyms': ['LysoPG', 'lysoPG'],
                'formula': {'C': 6, 'H': 13, 'O': 8, 'P': 1},
                'slots': 2,
                'chains': 1,
                'lcb': False,
                'charge': 0,
                'ionization': 'neg',
                'lyso': None,
            },
        },
        # ---------- PIs ----------
        'Glycerophosphoinositols': {
            'PI': {
                'lm_id_prefix': 'LMGP0601',
                'description': 'phosphatidylinositol',
                'synonyms': ['GPIns'],
                'formula': {'C': 9, 'H': 17, 'O': 11, 'P': 1},
                'slots': 2,
                'chains': 2,
                'lcb': False,
                'charge': 0,
                'ionization': 'neg',
                'lyso': 'LPI',
            },
            'LPI': {
                'lm_id_prefix': 'LMGP0605',
                'description': 'lysophosphatidylinositol',
                'synonyms': ['LysoPI', 'lysoPI'],
                'formula': {'C': 9, 'H': 17, 'O': 11, 'P': 1},
                'slots': 2,
                'chains': 1,
                'lcb': False,
                'charge': 0,
                'ionization': 'neg',
                'lyso': None,
            },
        },
        'Glycerophosphoinositol monophosphates': {
            'PIP': {
                'lm_id_prefix': 'LMGP0701',
                'description': 'phosphatidylinositol monophosphate',
                'synonyms': [],
                'formula': {'C': 9, 'H': 18, 'O': 14, 'P': 2},
                'slots': 2,
                'chains': 2,
                'lcb': False,
                'charge': 0,
                'ionization': 'neg',
                'lyso': None,
            },
        },
        'Glycerophosphoinositol bisphosphates': {
            'PIP2': {
                'lm_id_prefix': 'LMGP0801',
                'description': 'phosphatidylinositol bisphosphate',
                'synonyms': [],
                'formula': {'C': 9, 'H': 19, 'O': 17, 'P': 3},
                'slots': 2,
                'chains': 2,
                'lcb': False,
                'charge': 0,
                'ionization': 'neg',
                'lyso': None,
            },
        },
        # ---------- PAs ----------
        'Glycerophosphates': {
            'PA': {
                'lm_id_prefix': 'LMGP1001',
                'description': 'phosphatidic acid',
                'synonyms': [],
                'formula': {'C': 3, 'H': 7, 'O': 6, 'P': 1},
                'slots': 2,
                'chains': 2,
                'lcb': False,
                'charge': 0,
                'ionization': 'neg',
                'lyso': 'LPA',
            },
            'LPA': {
                'lm_id_prefix': 'LMGP1005',
                'description': 'lysophosphatidic acid',
                'synonyms': ['LysoPA', 'lysoPA'],
                'formula': {'C': 3, 'H': 7, 'O': 6, 'P': 1},
                'slots': 2,
                'chains': 1,
                'lcb': False,
                'charge': 0,
                'ionization': 'neg',
                'lyso': None,
            },
        },
        'Glycerophosphoglycerophosphoglycerols': {
            'CL': {
                'lm_id_prefix': 'LMGP1201',
                'description': 'cardiolipin',
                'synonyms': [],
                'formula': {'C': 9, 'H': 18, 'O': 13, 'P': 2},
                'slots': 4,
                'chains': 4,
                'lcb': False,
                'charge': 0,
                'ionization': 'neg',
                'lyso': None,
            },
        },
    },
    'Sphingolipids': {
        'Sphingoid bases': {
            'SPB': {
                'lm_id_prefix': 'LMSP01',
                'description': 'sphingoid base',
                'synonyms': ['LCB'],
                'formula': {'H': 2},
                'slots': 1,
                'chains': 1,
                'lcb': True,
                'charge': 0,
                'ionization': 'pos',
                'lyso': None,
            },
        },
        'Ceramides': {
            'Cer': {
                'lm_id_prefix': 'LMSP02',
                'description': 'ceramide',
                'synonyms': [],
                'formula': {'H': 1},
                'slots': 2,
                'chains': 2,
                'lcb': True,
                'charge': 0,
                'ionization': 'both',
                'lyso': None,
            },
        },
        'Phosphosphingolipids': {
            'SM': {
                'lm_id_prefix': 'LMSP0301',
                'description': 'sphingomyelin',
                'synonyms': [],
                'formula': {'C': 5, 'H': 13, 'N': 1, 'O': 3, 'P': 1},
                'slots': 2,
                'chains': 2,
                'lcb': True,
                'charge': 0,
                'ionization': 'pos',
                'lyso': None,
            },
        },
        'Neutral glycosphingolipids': {
            'HexCer': {
                'lm_id_prefix': 'LMSP0501',
                'description': 'hexosylceramide',
                'synonyms': ['Hex1Cer', 'GlcCer', 'GalCer'],
                'formula': {'C': 6, 'H': 11, 'O': 5},
                'slots': 2,
                'chains': 2,
                'lcb': True,
                'charge': 0,
                'ionization': 'both',
                'lyso': None,
            },
            'Hex2Cer': {
                'lm_id_prefix': 'LMSP0501',
                'description': 'dihexosylceramide',
                'synonyms': ['LacCer'],
                'formula': {'C': 12, 'H': 21, 'O': 10},
                'slots': 2,
                'chains': 2,
                'lcb': True,
                'charge': 0,
                'ionization': 'both',
                'lyso': None,
            },
        },
    },
    'Sterol Lipids': {
        'Sterol esters': {
            'CE': {
                'lm_id_prefix': 'LMST0102',
                'description': 'cholesteryl ester',
                'synonyms': ['ChE'],
                'formula': {'C': 27, 'H': 45, 'O': 1},
                'slots': 1,
                'chains': 1,
                'lcb': False,
                'charge': 0,
                'ionization': 'pos',
                'lyso': None,
            },
        },
    },
}


# functional group templates, 'gain' and 'loss' are the elements added to and removed from the chain they sit on
# 'double_bonds' counts double bond equivalents introduced by the group (not part of the chain double bond count)
_FUNCTIONAL_GROUPS = {
    'OH': {'description': 'hydroxyl', 'gain': {'O': 1}, 'loss': {}, 'double_bonds': 0},
    'oxo': {'description': 'keto', 'gain': {'O': 1}, 'loss': {'H': 2}, 'double_bonds': 1},
    'Me': {'description': 'methyl', 'gain': {'C': 1, 'H': 2}, 'loss': {}, 'double_bonds': 0},
    'Et': {'description': 'ethyl', 'gain': {'C': 2, 'H': 4}, 'loss': {}, 'double_bonds': 0},
    'NH2': {'description': 'amino', 'gain': {'N': 1, 'H': 1}, 'loss': {}, 'double_bonds': 0},
    'OOH': {'description': 'hydroperoxy', 'gain': {'O': 2}, 'loss': {}, 'double_bonds': 0},
    'Ep': {'description': 'epoxy', 'gain': {'O': 1}, 'loss': {'H': 2}, 'double_bonds': 1},
    'COOH': {'description': 'carboxyl', 'gain': {'C': 1, 'O': 2}, 'loss': {}, 'double_bonds': 1},
    'SH': {'description': 'sulfanyl', 'gain': {'S': 1}, 'loss': {}, 'double_bonds': 0},
    'NO2': {'description': 'nitro', 'gain': {'N': 1, 'O': 2}, 'loss': {'H': 1}, 'double_bonds': 1},
    'F': {'description': 'fluoro', 'gain': {'F': 1}, 'loss': {'H': 1}, 'double_bonds': 0},
    'Cl': {'description': 'chloro', 'gain': {'Cl': 1}, 'loss': {'H': 1}, 'double_bonds': 0},
    'Br': {'description': 'bromo', 'gain': {'Br': 1}, 'loss': {'H': 1}, 'double_bonds': 0},
    'I': {'description': 'iodo', 'gain': {'I': 1}, 'loss': {'H': 1}, 'double_bonds': 0},
    # ester-linked acyl chain hanging off another chain (FAHFA), the acyl chain itself is a child group
    'FA': {'description': 'acyl ester', 'gain': {'O': 1}, 'loss': {'H': 1}, 'double_bonds': 0},
}


# head group decorators (sugars on glycolipids), 'generic' is the name used below structure defined level
_HEADGROUP_DECORATORS = {
    'Hex': {'gain': {'C': 6, 'H': 10, 'O': 5}, 'loss': {}, 'generic': 'Hex'},
    'Glc': {'gain': {'C': 6, 'H': 10, 'O': 5}, 'loss': {}, 'generic': 'Hex'},
    'Gal': {'gain': {'C': 6, 'H': 10, 'O': 5}, 'loss': {}, 'generic': 'Hex'},
    'HexNAc': {'gain': {'C': 8, 'H': 13, 'N': 1, 'O': 5}, 'loss': {}, 'generic': 'HexNAc'},
    'GlcNAc': {'gain': {'C': 8, 'H': 13, 'N': 1, 'O': 5}, 'loss': {}, 'generic': 'HexNAc'},
    'GalNAc': {'gain': {'C': 8, 'H': 13, 'N': 1, 'O': 5}, 'loss': {}, 'generic': 'HexNAc'},
    'dHex': {'gain': {'C': 6, 'H': 10, 'O': 4}, 'loss': {}, 'generic': 'dHex'},
    'Fuc': {'gain': {'C': 6, 'H': 10, 'O': 4}, 'loss': {}, 'generic': 'dHex'},
    'NeuAc': {'gain': {'C': 11, 'H': 17, 'N': 1, 'O': 8}, 'loss': {}, 'generic': 'NeuAc'},
    'NeuGc': {'gain': {'C': 11, 'H': 17, 'N': 1, 'O': 9}, 'loss': {}, 'generic': 'NeuGc'},
    'SHex': {'gain': {'C': 6, 'H': 10, 'O': 8, 'S': 1}, 'loss': {}, 'generic': 'SHex'},
}


def _iterate_all_lipid_classes():
    """
    generator function that iterates through all of the entries in _LIPID_CLASSES and yields individual class info
    as well as the corresponding classification

    Yields
    ------
    class_info : ``tuple(str)``
        lipid classification info (category, main class, class abbreviation)
    lipid_info : ``dict(...)``
        lipid class information (formula, slots, chains, ...)
    """
    for lcategory in _LIPID_CLASSES:
        for lclass in _LIPID_CLASSES[lcategory]:
            for abbrev, lipid_info in _LIPID_CLASSES[lcategory][lclass].items():
                yield (lcategory, lclass, abbrev), lipid_info


def _build_class_index():
    """ maps every class abbreviation and synonym onto its classification, synonyms never shadow abbreviations """
    index = {}
    for class_info, lipid_info in _iterate_all_lipid_classes():
        index[class_info[2]] = class_info
    for class_info, lipid_info in _iterate_all_lipid_classes():
        for synonym in lipid_info['synonyms']:
            index.setdefault(synonym, class_info)
    return index


_CLASS_INDEX = _build_class_index()


def lipid_class_names():
    """
    canonical abbreviations of all registered lipid classes

    Returns
    -------
    names : ``list(str)``
        class abbreviations
    """
    return [class_info[2] for class_info, _ in _iterate_all_lipid_classes()]


def lookup_lipid_class(name):
    """
    looks up a lipid class by abbreviation or synonym

    Parameters
    ----------
    name : ``str``
        class abbreviation or synonym (e.g. 'PC', 'LysoPC', 'TAG')

    Returns
    -------
    lipid_info : ``dict(...)``
        copy of the class entry, extended with 'class_abbrev', 'category' (abbreviation), 'lmaps_category' and
        'lmaps_class'
    """
    if name not in _CLASS_INDEX:
        raise UnknownNameError('HeadGroup', name)
    lcategory, lclass, abbrev = _CLASS_INDEX[name]
    lipid_info = deepcopy(_LIPID_CLASSES[lcategory][lclass][abbrev])
    lipid_info['class_abbrev'] = abbrev
    lipid_info['category'] = _CATEGORY_ABBREVS[lcategory]
    lipid_info['lmaps_category'] = lcategory
    lipid_info['lmaps_class'] = lclass
    return lipid_info


def lookup_functional_group(name):
    """
    looks up a functional group template

    Parameters
    ----------
    name : ``str``
        functional group name (e.g. 'OH', 'oxo', 'Me')

    Returns
    -------
    template : ``dict(...)``
        copy of the template ('description', 'gain', 'loss', 'double_bonds')
    """
    if name not in _FUNCTIONAL_GROUPS:
        raise UnknownNameError('FunctionalGroup', name)
    return deepcopy(_FUNCTIONAL_GROUPS[name])


def lookup_decorator(name):
    """
    looks up a head group decorator

    Parameters
    ----------
    name : ``str``
        decorator name (e.g. 'Gal', 'Hex', 'NeuAc')

    Returns
    -------
    decorator : ``dict(...)``
        copy of the decorator ('gain', 'loss', 'generic')
    """
    if name not in _HEADGROUP_DECORATORS:
        raise UnknownNameError('Decorator', name)
    return deepcopy(_HEADGROUP_DECORATORS[name])
