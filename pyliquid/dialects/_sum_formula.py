"""
pyliquid/dialects/_sum_formula.py

    elemental sum formulas (e.g. C16H32O2, C42H82NO8P, C'2C14H32O2), folded into a ``Formula`` rather than a lipid
"""


import string

from pyliquid._elements import element_symbols
from pyliquid.dialects._handler import EventHandler, literal_alternatives, fold_element_counts
from pyliquid.grammar import Grammar


_GRAMMAR = """
sum_formula : element_count+ ;
element_count : element number? ;
element : {elements} ;
number : digit+ ;
digit : {digits} ;
""".format(elements=literal_alternatives(element_symbols()), digits=literal_alternatives(string.digits))


def sum_formula_handler():
    """
    event handler for sum formulas

    Returns
    -------
    handler : ``pyliquid.dialects._handler.EventHandler``
        sum formula handler
    """
    return EventHandler('sum_formula', Grammar('sum_formula', _GRAMMAR), {'sum_formula': fold_element_counts})
