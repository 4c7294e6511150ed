"""
pyliquid/_config.py

    internal module for configuration parameters
"""


# inputs longer than this are rejected before any grammar runs (None disables the check)
MAX_INPUT_LENGTH = 1024

# maximum number of nested rule expansions while parsing, keeps deeply nested names below the interpreter recursion
# limit
MAX_RULE_DEPTH = 100

# order in which the dialects are tried when no dialect is specified
DIALECT_ORDER = (
    'shorthand',
    'fatty_acid',
    'goslin',
    'lipidmaps',
    'swisslipids',
    'hmdb',
    'sum_formula',
)

# electron rest mass (Da), removed once per positive charge on adduct m/z
ELECTRON_REST_MASS = 0.00054857990946

# isotope mode used for masses when none is given
DEFAULT_ISOTOPE = 'monoisotopic'

# number of decimal places for masses in batch output
MASS_DECIMALS = 4
