"""
pyliquid/errors.py

    exceptions raised while parsing lipid names and doing formula arithmetic

    All of the user-facing exceptions derive from ``LipidError`` (itself a ``ValueError``), so callers that only care
    whether a name could be handled can catch that one class.
"""


class LipidError(ValueError):
    """ base class for all user-facing pyliquid errors """


class EmptyInputError(LipidError):
    """ raised when the input is empty or whitespace only """

    def __init__(self):
        super().__init__('parse_lipid_name: input is empty')


class InputTooLongError(LipidError):
    """
    raised when the input is longer than the configured maximum, before any grammar runs

    Attributes
    ----------
    length : ``int``
        length of the rejected input
    limit : ``int``
        maximum accepted input length
    """

    def __init__(self, length, limit):
        self.length = length
        self.limit = limit
        msg = 'parse_lipid_name: input length ({}) exceeds the maximum of {} characters'
        super().__init__(msg.format(length, limit))


class LipidSyntaxError(LipidError):
    """
    raised when no rule of a dialect grammar spans the whole input

    Attributes
    ----------
    dialect : ``str``
        name of the dialect whose grammar rejected the input
    position : ``int``
        furthest input position reached before matching failed
    expected_rule : ``str``
        grammar rule that was being matched at that position
    text : ``str``
        the rejected input
    """

    def __init__(self, dialect, position, expected_rule, text):
        self.dialect = dialect
        self.position = position
        self.expected_rule = expected_rule
        self.text = text
        msg = '{}: syntax error at position {} while matching rule "{}": "{}" <-- here --> "{}"'
        super().__init__(msg.format(dialect, position, expected_rule, text[:position], text[position:]))


class NestingTooDeepError(LipidSyntaxError):
    """
    raised when a name nests (e.g. acyl groups within acyl groups) deeper than the dialect grammar is allowed to expand

    Attributes
    ----------
    max_depth : ``int``
        maximum number of nested grammar rule expansions
    """

    def __init__(self, dialect, position, expected_rule, text, max_depth):
        super().__init__(dialect, position, expected_rule, text)
        self.max_depth = max_depth
        msg = '{}: input nests more than {} grammar rules deep at position {} (rule "{}")'
        self.args = (msg.format(dialect, max_depth, position, expected_rule),)


class LipidSemanticError(LipidError):
    """
    raised when a well-formed name violates a structural invariant (e.g. more double bonds than the chain can hold)

    Attributes
    ----------
    rule : ``str``
        grammar rule (or structure) that carried the offending value
    detail : ``str``
        description of the violation
    """

    def __init__(self, rule, detail):
        self.rule = rule
        self.detail = detail
        super().__init__('{}: {}'.format(rule, detail))


class UnknownNameError(LipidError):
    """
    raised when a registry lookup misses

    Attributes
    ----------
    kind : ``str``
        kind of registry entry that was looked up ('HeadGroup', 'FunctionalGroup', 'Decorator', 'Element', ...)
    value : ``str``
        the name that was not found
    """

    def __init__(self, kind, value):
        self.kind = kind
        self.value = value
        super().__init__('unknown {} "{}"'.format(kind, value))


class UnknownElementError(UnknownNameError):
    """ raised when an element symbol is not in the element table """

    def __init__(self, value):
        super().__init__('Element', value)


class NegativeElementCountError(LipidError):
    """
    raised when formula arithmetic would leave an element with a negative count

    Attributes
    ----------
    element : ``str``
        element symbol
    available : ``int``
        count present before the subtraction
    requested : ``int``
        count that was to be removed
    """

    def __init__(self, element, available, requested):
        self.element = element
        self.available = available
        self.requested = requested
        msg = 'Formula: subtract: cannot remove {} {} (only {} present)'
        super().__init__(msg.format(requested, element, available))


class LevelTooLowError(LipidError):
    """
    raised when a lipid is asked for a structural level above the one it carries

    Attributes
    ----------
    current : ``pyliquid.lipids.LipidLevel``
        level of the lipid
    requested : ``pyliquid.lipids.LipidLevel``
        requested level
    """

    def __init__(self, current, requested):
        self.current = current
        self.requested = requested
        msg = 'LipidSpecies: downgrade: lipid is at level {} and cannot be raised to {}'
        super().__init__(msg.format(current.name, requested.name))


class NoMatchingDialectError(LipidError):
    """
    raised by the dispatch parser when no dialect accepts the input

    Attributes
    ----------
    name : ``str``
        the rejected input
    failures : ``dict(str:LipidError)``
        failure of every dialect that was tried, in the order they were tried
    primary : ``LipidError``
        the most informative of the failures (see ``pyliquid.parser.best_failure``)
    """

    def __init__(self, name, failures, primary):
        self.name = name
        self.failures = failures
        self.primary = primary
        msg = 'parse_lipid_name: "{}" could not be parsed with any dialect ({} tried), best diagnostic: {}'
        super().__init__(msg.format(name, len(failures), primary))


class HandlerContractError(RuntimeError):
    """ raised when an event handler meets a grammar rule it has no fold function for (a programming error) """
