"""
pyliquid/formula.py

    elemental formula arithmetic

    A ``Formula`` is an immutable multiset of element counts. Arithmetic returns new instances and never produces a
    negative count, so anything holding a ``Formula`` can hand it out without copying.
"""


from pyliquid._elements import formula_mass
from pyliquid.errors import NegativeElementCountError


def _hill_key(symbol):
    """ sort key for Hill order: C, H, then alphabetical, with isotopes right after their element """
    base = symbol.rstrip("'")
    rank = 0 if base == 'C' else 1 if base == 'H' else 2
    return (rank, base, symbol)


class Formula():
    """
    elemental formula, a mapping from element symbol to (positive) count

    Parameters
    ----------
    counts : ``dict(str:int)``, optional
        element counts, zero counts are dropped, negative counts are rejected
    """

    __slots__ = ('_counts',)

    def __init__(self, counts=None):
        self._counts = {}
        if counts is None:
            return
        for element, count in dict(counts).items():
            if int(count) != count:
                msg = 'Formula: __init__: count for {} must be an integer (was: {})'
                raise ValueError(msg.format(element, count))
            if count < 0:
                raise NegativeElementCountError(element, 0, -count)
            if count > 0:
                self._counts[element] = int(count)

    def __getitem__(self, element):
        return self._counts.get(element, 0)

    def __iter__(self):
        return iter(sorted(self._counts, key=_hill_key))

    def __len__(self):
        return len(self._counts)

    def __bool__(self):
        return bool(self._counts)

    def __contains__(self, element):
        return element in self._counts

    def items(self):
        """ (element, count) pairs in Hill order """
        return [(element, self._counts[element]) for element in self]

    def to_dict(self):
        """ plain ``dict(str:int)`` copy of the counts """
        return dict(self._counts)

    def add(self, other, n=1):
        """
        returns a new formula with ``n`` times ``other`` added

        Parameters
        ----------
        other : ``Formula`` or ``dict(str:int)``
            formula to add
        n : ``int``, default=1
            multiplier for ``other``

        Returns
        -------
        formula : ``Formula``
            sum
        """
        counts = dict(self._counts)
        for element, count in dict(other.to_dict() if isinstance(other, Formula) else other).items():
            counts[element] = counts.get(element, 0) + n * count
        return Formula(counts)

    def subtract(self, other, n=1):
        """
        returns a new formula with ``n`` times ``other`` removed, raises ``NegativeElementCountError`` if any element
        would drop below zero

        Parameters
        ----------
        other : ``Formula`` or ``dict(str:int)``
            formula to remove
        n : ``int``, default=1
            multiplier for ``other``

        Returns
        -------
        formula : ``Formula``
            difference
        """
        counts = dict(self._counts)
        for element, count in dict(other.to_dict() if isinstance(other, Formula) else other).items():
            remaining = counts.get(element, 0) - n * count
            if remaining < 0:
                raise NegativeElementCountError(element, counts.get(element, 0), n * count)
            counts[element] = remaining
        return Formula(counts)

    def multiply(self, k):
        """
        returns a new formula with every count multiplied by ``k``

        Parameters
        ----------
        k : ``int``
            non-negative scalar

        Returns
        -------
        formula : ``Formula``
            scaled formula
        """
        if int(k) != k or k < 0:
            msg = 'Formula: multiply: scalar must be a non-negative integer (was: {})'
            raise ValueError(msg.format(k))
        return Formula({element: count * int(k) for element, count in self._counts.items()})

    def mass(self, isotope='monoisotopic'):
        """
        computes the mass of this formula

        Parameters
        ----------
        isotope : ``str``, default='monoisotopic'
            'monoisotopic' or 'average'

        Returns
        -------
        mass : ``float``
            mass (Da)
        """
        return formula_mass(self._counts, isotope)

    def __add__(self, other):
        return self.add(other)

    def __sub__(self, other):
        return self.subtract(other)

    def __mul__(self, k):
        return self.multiply(k)

    __rmul__ = __mul__

    def __eq__(self, other):
        if isinstance(other, Formula):
            return self._counts == other._counts
        if isinstance(other, dict):
            return self._counts == {e: c for e, c in other.items() if c != 0}
        return NotImplemented

    def __hash__(self):
        return hash(frozenset(self._counts.items()))

    def __str__(self):
        return ''.join(element if count == 1 else '{}{}'.format(element, count) for element, count in self.items())

    def __repr__(self):
        return 'Formula("{}")'.format(self)
