"""
pyliquid/_elements.py

    internal module with the element table

    Monoisotopic masses of the natural elements come from mzapy. mzapy has no average masses and no heavy isotope
    entries, those are kept here. Heavy isotopes are written with a trailing apostrophe (C', H', N', ...) and carry
    the same mass for both isotope modes. The tables are built once at import and are never modified afterwards.
"""


from types import MappingProxyType

from mzapy.isotopes import monoiso_mass

from pyliquid.errors import UnknownElementError


# symbol: average mass, monoisotopic masses are computed with mzapy
_AVERAGE_MASSES = {
    'C': 12.0107,
    'H': 1.00794,
    'N': 14.0067,
    'O': 15.9994,
    'P': 30.973762,
    'S': 32.065,
    'F': 18.9984032,
    'Cl': 35.453,
    'Br': 79.904,
    'I': 126.90447,
    'Na': 22.98976928,
    'K': 39.0983,
    'Li': 6.941,
    'As': 74.9216,
    'Se': 78.971,
}

# symbol: mass of the heavy isotope (used for both isotope modes)
_HEAVY_ISOTOPE_MASSES = {
    "C'": 13.00335483507,
    "H'": 2.01410177812,
    "N'": 15.00010889888,
    "O'": 17.99915961286,
    "P'": 31.97390764,
    "S'": 33.967867004,
}

AVERAGE_MASSES = MappingProxyType(_AVERAGE_MASSES)
HEAVY_ISOTOPE_MASSES = MappingProxyType(_HEAVY_ISOTOPE_MASSES)

ISOTOPE_MODES = ('monoisotopic', 'average')


def element_symbols():
    """
    all element symbols in the table, longest first (so that grammar alternatives list 'Cl' ahead of 'C')

    Returns
    -------
    symbols : ``list(str)``
        element symbols
    """
    return sorted(list(AVERAGE_MASSES) + list(HEAVY_ISOTOPE_MASSES), key=lambda s: (-len(s), s))


def _check_isotope_mode(isotope):
    if isotope not in ISOTOPE_MODES:
        msg = 'formula_mass: isotope must be one of {} (was: "{}")'
        raise ValueError(msg.format(ISOTOPE_MODES, isotope))


def _monoiso_mass(counts):
    try:
        return monoiso_mass(counts)
    except KeyError as err:
        raise UnknownElementError(err.args[0]) from None


def formula_mass(counts, isotope='monoisotopic'):
    """
    mass of a set of element counts, natural elements go through ``mzapy.isotopes.monoiso_mass`` for monoisotopic
    masses

    Parameters
    ----------
    counts : ``dict(str:int)``
        element counts
    isotope : ``str``, default='monoisotopic'
        'monoisotopic' or 'average'

    Returns
    -------
    mass : ``float``
        mass (Da)
    """
    _check_isotope_mode(isotope)
    natural, heavy = {}, 0.
    for symbol, count in counts.items():
        if symbol in HEAVY_ISOTOPE_MASSES:
            heavy += count * HEAVY_ISOTOPE_MASSES[symbol]
        elif symbol in AVERAGE_MASSES:
            natural[symbol] = count
        else:
            raise UnknownElementError(symbol)
    if not natural:
        return heavy
    if isotope == 'monoisotopic':
        return _monoiso_mass(natural) + heavy
    return sum(count * AVERAGE_MASSES[symbol] for symbol, count in natural.items()) + heavy

