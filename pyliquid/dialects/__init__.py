"""
pyliquid/dialects/__init__.py

    per-dialect grammars and event handlers
"""


from pyliquid.dialects._handler import EventHandler, assemble_lipid
from pyliquid.dialects._shorthand import shorthand_handler
from pyliquid.dialects._fatty_acid import fatty_acid_handler
from pyliquid.dialects._goslin import goslin_handler
from pyliquid.dialects._lipidmaps import lipidmaps_handler
from pyliquid.dialects._swisslipids import swisslipids_handler
from pyliquid.dialects._hmdb import hmdb_handler
from pyliquid.dialects._sum_formula import sum_formula_handler


# dialect name -> handler factory
HANDLER_FACTORIES = {
    'shorthand': shorthand_handler,
    'fatty_acid': fatty_acid_handler,
    'goslin': goslin_handler,
    'lipidmaps': lipidmaps_handler,
    'swisslipids': swisslipids_handler,
    'hmdb': hmdb_handler,
    'sum_formula': sum_formula_handler,
}
