"""
pyliquid/parser.py

    dispatch parser: tries the dialects in a fixed order and returns the first successful parse

    When every dialect fails, the failures are aggregated into a ``NoMatchingDialectError``. Its primary failure is
    picked by ``best_failure``: failures raised after a complete syntactic match (semantic errors and registry misses)
    are preferred over syntax errors, among syntax errors the one that got furthest into the input wins and remaining
    ties go to the dialect that comes first in the order.
"""


from pyliquid._config import DIALECT_ORDER, MAX_INPUT_LENGTH
from pyliquid._util import _debug_handler
from pyliquid.dialects import HANDLER_FACTORIES
from pyliquid.errors import EmptyInputError, InputTooLongError, LipidError, LipidSyntaxError, NoMatchingDialectError


def best_failure(failures):
    """
    picks the most informative failure out of the per-dialect failures

    Parameters
    ----------
    failures : ``dict(str:pyliquid.errors.LipidError)``
        failure of each dialect, in the order the dialects were tried

    Returns
    -------
    failure : ``pyliquid.errors.LipidError``
        primary failure
    """
    best, best_key = None, None
    for i, failure in enumerate(failures.values()):
        if isinstance(failure, LipidSyntaxError):
            key = (0, failure.position, -i)
        else:
            key = (1, 0, -i)
        if best_key is None or key > best_key:
            best, best_key = failure, key
    return best


class LipidParser():
    """
    parses lipid names in any of the supported dialects

    Parameters
    ----------
    dialects : ``list(str)``, optional
        dialects to try, in order, defaults to all of them in the default order
    max_length : ``int``, optional
        maximum accepted input length, None to accept any length
    """

    def __init__(self, dialects=None, max_length=MAX_INPUT_LENGTH):
        dialects = DIALECT_ORDER if dialects is None else dialects
        for dialect in dialects:
            if dialect not in HANDLER_FACTORIES:
                msg = 'LipidParser: __init__: unrecognized dialect "{}" (expected one of: {})'
                raise ValueError(msg.format(dialect, list(HANDLER_FACTORIES)))
        self.dialects = list(dialects)
        self.max_length = max_length
        self._handlers = {dialect: HANDLER_FACTORIES[dialect]() for dialect in self.dialects}

    def _check_input(self, name):
        if name is None or not name.strip():
            raise EmptyInputError()
        if self.max_length is not None and len(name) > self.max_length:
            raise InputTooLongError(len(name), self.max_length)

    def parse(self, name, dialect=None, debug_flag=None, debug_cb=None):
        """
        parses a lipid name

        Parameters
        ----------
        name : ``str``
            lipid name (or sum formula)
        dialect : ``str``, optional
            only try this dialect and raise its error directly if it fails
        debug_flag : ``str``, optional
            specifies how to dispatch debugging messages, None to do nothing
        debug_cb : ``func``, optional
            callback function that takes the debugging message as an argument, can be None if
            debug_flag is not set to 'textcb'

        Returns
        -------
        result : ``pyliquid.lipids.LipidAdduct`` or ``pyliquid.formula.Formula``
            parsed lipid, or the parsed formula for the sum formula dialect
        """
        self._check_input(name)
        if dialect is not None:
            if dialect not in self._handlers:
                msg = 'LipidParser: parse: dialect "{}" is not enabled (enabled: {})'
                raise ValueError(msg.format(dialect, self.dialects))
            _debug_handler(debug_flag, debug_cb, 'parsing "{}" as {}'.format(name, dialect))
            return self._handlers[dialect].parse(name)
        return self.parse_dialect(name, debug_flag=debug_flag, debug_cb=debug_cb)[0]

    def parse_dialect(self, name, debug_flag=None, debug_cb=None):
        """
        like ``parse`` (without a dialect hint) but also returns the name of the dialect that succeeded

        Returns
        -------
        result : ``pyliquid.lipids.LipidAdduct`` or ``pyliquid.formula.Formula``
            parse result
        dialect : ``str``
            dialect that parsed the name
        """
        self._check_input(name)
        failures = {}
        for dialect_name in self.dialects:
            try:
                result = self._handlers[dialect_name].parse(name)
            except LipidError as err:
                _debug_handler(debug_flag, debug_cb, '{} failed: {}'.format(dialect_name, err))
                failures[dialect_name] = err
                continue
            _debug_handler(debug_flag, debug_cb, 'parsed "{}" as {}'.format(name, dialect_name))
            return result, dialect_name
        raise NoMatchingDialectError(name, failures, best_failure(failures))


_DEFAULT_PARSER = None


def _default_parser():
    global _DEFAULT_PARSER
    if _DEFAULT_PARSER is None:
        _DEFAULT_PARSER = LipidParser()
    return _DEFAULT_PARSER


def parse_lipid_name(name, dialect=None, debug_flag=None, debug_cb=None):
    """
    Parses a lipid name in any of the supported dialects (shorthand, fatty acid names, Goslin, LIPID MAPS,
    SwissLipids, HMDB) or an elemental sum formula

    Parameters
    ----------
    name : ``str``
        lipid name
    dialect : ``str``, optional
        only try this dialect
    debug_flag : ``str``, optional
        specifies how to dispatch debugging messages, None to do nothing
    debug_cb : ``func``, optional
        callback function that takes the debugging message as an argument, can be None if
        debug_flag is not set to 'textcb'

    Returns
    -------
    result : ``pyliquid.lipids.LipidAdduct`` or ``pyliquid.formula.Formula``
        parsed lipid, or a formula for sum formulas
    """
    return _default_parser().parse(name, dialect=dialect, debug_flag=debug_flag, debug_cb=debug_cb)
