"""
pyliquid/lipids.py

    lipid domain model: structural levels, functional groups, fatty acyl chains, head groups, species, adducts

    A lipid is a single ``LipidSpecies`` type tagged with a ``LipidLevel``, it only ever carries the information that
    is valid at its level (e.g. a MOLECULAR_SPECIES lipid has chains without sn positions, a SPECIES lipid has no
    chains at all). Going down in level is always possible (``LipidSpecies.downgrade``), going up is not.

    Functional groups and chains own the children they are constructed with (nothing is shared between two trees),
    ``copy`` makes a deep copy and ``strip`` builds a new tree. Registry templates are looked up by name and copied.
"""


from enum import Enum, IntEnum

from pyliquid._config import ELECTRON_REST_MASS, DEFAULT_ISOTOPE
from pyliquid._registry import lookup_lipid_class, lookup_functional_group, lookup_decorator
from pyliquid.formula import Formula
from pyliquid.errors import LipidSemanticError, LevelTooLowError


class LipidLevel(IntEnum):
    """ structural detail levels, ordered from least to most detailed """
    CATEGORY = 1
    CLASS = 2
    SPECIES = 3
    MOLECULAR_SPECIES = 4
    SN_POSITION = 5
    STRUCTURE_DEFINED = 6
    FULL_STRUCTURE = 7
    COMPLETE_STRUCTURE = 8


class LipidCategory(Enum):
    """ Lipid MAPS lipid categories """
    FA = 'Fatty Acyls'
    GL = 'Glycerolipids'
    GP = 'Glycerophospholipids'
    SP = 'Sphingolipids'
    ST = 'Sterol Lipids'


class ChainBondType(Enum):
    """ how a chain is attached to the rest of the lipid """
    ESTER = 'ester'
    ETHER = 'ether'
    PLASMENYL = 'plasmenyl'
    AMIDE = 'amide'
    LCB = 'lcb'
    NONE = 'none'


# name prefixes of the bond types that show up in the shorthand notation
_BOND_PREFIXES = {
    ChainBondType.ETHER: 'O-',
    ChainBondType.PLASMENYL: 'P-',
}

# bond type -> (hydrogen offset on top of 2 * C - 2 * DB, additional elements)
_BOND_ELEMENTS = {
    ChainBondType.ESTER: (-1, {'O': 1}),
    ChainBondType.AMIDE: (-1, {'O': 1}),
    ChainBondType.ETHER: (1, {}),
    ChainBondType.PLASMENYL: (-1, {}),
    ChainBondType.LCB: (1, {'N': 1}),
}


def bond_type_from_prefix(prefix):
    """
    bond type for a shorthand chain prefix

    Parameters
    ----------
    prefix : ``str``
        'O-', 'P-' or '' (plain ester)

    Returns
    -------
    bond_type : ``ChainBondType``
        corresponding bond type
    """
    for bond_type, bond_prefix in _BOND_PREFIXES.items():
        if prefix == bond_prefix:
            return bond_type
    if prefix:
        raise LipidSemanticError('bond_prefix', 'unrecognized chain prefix "{}"'.format(prefix))
    return ChainBondType.ESTER


def _chain_base_elements(carbons, double_bonds, layout):
    """ elemental composition of the carbon backbone(s) described by total carbons/double bonds and bond types """
    h_offset, extra = 0, Formula()
    for bond_type in layout:
        offset, elements = _BOND_ELEMENTS[bond_type]
        h_offset += offset
        extra = extra.add(elements)
    hydrogens = 2 * carbons - 2 * double_bonds + h_offset
    if hydrogens < 0:
        msg = 'chain with {} carbons and {} double bonds has no hydrogens left'
        raise LipidSemanticError('db_count', msg.format(carbons, double_bonds))
    return Formula({'C': carbons, 'H': hydrogens}).add(extra)


def _check_double_bond_capacity(rule, carbons, double_bonds):
    capacity = max(carbons - 1, 0)
    if double_bonds > capacity:
        msg = 'double bond count ({}) exceeds the capacity of a chain with {} carbons (max: {})'
        raise LipidSemanticError(rule, msg.format(double_bonds, carbons, capacity))


class DoubleBonds():
    """
    double bond descriptor: a count and optionally the positions with their geometry

    Parameters
    ----------
    count : ``int``, default=0
        number of double bonds
    positions : ``dict(int:str)`` or ``list(tuple(int, str))``, optional
        double bond positions mapped to geometry ('E', 'Z' or '' when unknown)
    """

    def __init__(self, count=0, positions=None):
        if count < 0:
            msg = 'double bond count must be >= 0 (was: {})'
            raise LipidSemanticError('db_count', msg.format(count))
        self.count = count
        self.positions = {}
        if positions:
            items = positions.items() if isinstance(positions, dict) else positions
            for position, geometry in items:
                if position in self.positions:
                    msg = 'double bond position {} is given more than once'
                    raise LipidSemanticError('db_positions', msg.format(position))
                if geometry not in ('E', 'Z', ''):
                    msg = 'double bond geometry must be E or Z (was: "{}")'
                    raise LipidSemanticError('db_positions', msg.format(geometry))
                self.positions[position] = geometry
            if len(self.positions) != count:
                msg = 'number of double bond positions ({}) does not match the double bond count ({})'
                raise LipidSemanticError('db_positions', msg.format(len(self.positions), count))

    @property
    def positions_known(self):
        return self.count == 0 or len(self.positions) == self.count

    @property
    def geometry_known(self):
        return self.positions_known and all(geometry for geometry in self.positions.values())

    def copy(self):
        return DoubleBonds(self.count, dict(self.positions))

    def strip(self, level):
        """ copy without the information above ``level`` """
        if level < LipidLevel.STRUCTURE_DEFINED:
            return DoubleBonds(self.count)
        if level < LipidLevel.FULL_STRUCTURE:
            return DoubleBonds(self.count, {position: '' for position in self.positions})
        return self.copy()

    def to_string(self, level):
        if not self.positions or level < LipidLevel.STRUCTURE_DEFINED:
            return ''
        return '({})'.format(','.join('{}{}'.format(p, self.positions[p]) for p in sorted(self.positions)))

    def __eq__(self, other):
        if not isinstance(other, DoubleBonds):
            return NotImplemented
        return self.count == other.count and self.positions == other.positions

    def __repr__(self):
        return 'DoubleBonds(count={}, positions={})'.format(self.count, self.positions)


class FunctionalGroup():
    """
    functional group attached to a chain (or a head group decorator)

    The elemental contribution of a group is ``count * (own gain - own loss + sum of children contributions)``, gains
    and losses are tracked separately so that neither ever holds a negative count.

    Attributes
    ----------
    name : ``str``
        group name (e.g. 'OH', 'oxo', 'FA')
    count : ``int``
        number of identical groups this entry stands for
    position : ``int``
        carbon the group is attached to, None when unknown
    stereo : ``str``
        stereo configuration ('R' or 'S'), None when unknown
    double_bonds : ``DoubleBonds``
        double bond equivalents introduced by the group
    gain : ``pyliquid.formula.Formula``
        elements added by the group
    loss : ``pyliquid.formula.Formula``
        elements removed from the parent by the group
    children : ``list(FunctionalGroup)``
        nested groups, owned by this group
    """

    def __init__(self, name, count=1, position=None, stereo=None, double_bonds=0, gain=None, loss=None,
                 children=None):
        if count < 1:
            msg = 'count of functional group {} must be >= 1 (was: {})'
            raise LipidSemanticError('functional_group', msg.format(name, count))
        self.name = name
        self.count = count
        self.position = position
        self.stereo = stereo
        self.double_bonds = double_bonds.copy() if isinstance(double_bonds, DoubleBonds) else DoubleBonds(double_bonds)
        self.gain = gain if isinstance(gain, Formula) else Formula(gain)
        self.loss = loss if isinstance(loss, Formula) else Formula(loss)
        self.children = list(children) if children else []

    @classmethod
    def from_registry(cls, name, count=1, position=None, stereo=None, children=None):
        """
        builds a functional group from the registry template with the given name

        Parameters
        ----------
        name : ``str``
            functional group name
        count : ``int``, default=1
            number of groups
        position : ``int``, optional
            position on the chain
        stereo : ``str``, optional
            stereo configuration
        children : ``list(FunctionalGroup)``, optional
            nested groups (e.g. the acyl chain of an 'FA' group)

        Returns
        -------
        group : ``FunctionalGroup``
            new functional group
        """
        template = lookup_functional_group(name)
        return cls(name, count=count, position=position, stereo=stereo, double_bonds=template['double_bonds'],
                   gain=template['gain'], loss=template['loss'], children=children)

    def get_gain(self):
        gain = self.gain
        for child in self.children:
            gain = gain.add(child.get_gain())
        return gain.multiply(self.count)

    def get_loss(self):
        loss = self.loss
        for child in self.children:
            loss = loss.add(child.get_loss())
        return loss.multiply(self.count)

    def positions_known(self):
        return self.position is not None and all(child.positions_known() for child in self.children)

    def geometry_known(self):
        return all(child.geometry_known() for child in self.children)

    def has_stereo(self):
        return self.stereo is not None or any(child.has_stereo() for child in self.children)

    def copy(self):
        """ deep copy, every nested group is copied once """
        return FunctionalGroup(self.name, count=self.count, position=self.position, stereo=self.stereo,
                               double_bonds=self.double_bonds, gain=self.gain, loss=self.loss,
                               children=[child.copy() for child in self.children])

    def strip(self, level):
        """ copy without the information above ``level``, built bottom up from stripped children """
        return FunctionalGroup(self.name, count=self.count,
                               position=self.position if level >= LipidLevel.STRUCTURE_DEFINED else None,
                               stereo=self.stereo if level >= LipidLevel.COMPLETE_STRUCTURE else None,
                               double_bonds=self.double_bonds, gain=self.gain, loss=self.loss,
                               children=[child.strip(level) for child in self.children])

    def merge_key(self):
        """ groups with the same key are interchangeable once positions are dropped (children have to be stripped) """
        return (self.name, tuple(child.structure_key() for child in self.children))

    def structure_key(self):
        return self.merge_key() + (self.count,)

    def _body(self, level):
        if self.children:
            return '({})'.format(' '.join(['FA'] + [child.to_string(level) for child in self.children]))
        return self.name

    def to_string(self, level):
        """
        shorthand rendering of the group at ``level``, positioned groups render as '12OH' (or '12OH[R]'),
        unpositioned ones as 'O2' for hydroxyls and 'name' or '(name)2' otherwise
        """
        if self.position is not None and level >= LipidLevel.STRUCTURE_DEFINED:
            s = '{}{}'.format(self.position, self._body(level))
            if self.stereo is not None and level >= LipidLevel.COMPLETE_STRUCTURE:
                s += '[{}]'.format(self.stereo)
            return s
        if self.children:
            return self._body(level) + (str(self.count) if self.count > 1 else '')
        if self.name == 'OH':
            return 'O' if self.count == 1 else 'O{}'.format(self.count)
        return self.name if self.count == 1 else '({}){}'.format(self.name, self.count)

    def __repr__(self):
        return 'FunctionalGroup(name="{}", count={}, position={})'.format(self.name, self.count, self.position)


def merge_functional_groups(groups, level=LipidLevel.SN_POSITION):
    """
    merges unpositioned functional groups, identical groups are collapsed into one entry with the summed count

    Parameters
    ----------
    groups : ``list(FunctionalGroup)``
        groups to merge (positions and stereo are dropped)
    level : ``LipidLevel``, default=SN_POSITION
        level the groups are stripped to before merging, never above SN_POSITION

    Returns
    -------
    merged : ``list(FunctionalGroup)``
        merged groups, hydroxyls first and the rest sorted by name
    """
    merged = {}
    for group in groups:
        group = group.strip(min(level, LipidLevel.SN_POSITION))
        key = group.merge_key()
        if key in merged:
            merged[key].count += group.count
        else:
            merged[key] = group
    return [merged[key] for key in sorted(merged, key=lambda k: (k[0] != 'OH', k))]


def _sorted_positioned(groups):
    return sorted(groups, key=lambda g: (g.position, g.name))


def _render_groups(groups, level):
    if not groups:
        return ''
    if level >= LipidLevel.STRUCTURE_DEFINED and all(group.position is not None for group in groups):
        return ';' + ','.join(group.to_string(level) for group in _sorted_positioned(groups))
    return ''.join(';' + group.to_string(level) for group in merge_functional_groups(groups))


class FattyAcid(FunctionalGroup):
    """
    carbon chain (fatty acyl, alkyl, alkenyl or long chain base), functional groups on the chain are its children

    Attributes
    ----------
    carbons : ``int``
        carbon count
    double_bonds : ``DoubleBonds``
        double bonds of the chain (not counting the ones introduced by functional groups)
    bond_type : ``ChainBondType``
        how the chain is attached to the head group
    sn_position : ``int``
        sn position of the chain, 0 when unassigned
    """

    def __init__(self, carbons, double_bonds=0, bond_type=ChainBondType.ESTER, functional_groups=None,
                 sn_position=0, validate=True):
        super().__init__('FA', double_bonds=double_bonds, children=functional_groups)
        self.carbons = carbons
        self.bond_type = bond_type
        self.sn_position = sn_position
        # copies and stripped versions of a valid chain are valid
        if validate:
            self._validate()

    @classmethod
    def placeholder(cls, sn_position=0):
        """ empty chain slot (0:0) """
        return cls(0, bond_type=ChainBondType.NONE, sn_position=sn_position)

    def _validate(self):
        """ raises a LipidSemanticError if the chain violates any of the structural invariants """
        if self.bond_type is ChainBondType.NONE:
            if self.carbons != 0 or self.double_bonds.count or self.children:
                raise LipidSemanticError('chain', 'an empty chain slot cannot carry carbons, double bonds or groups')
            return
        if self.carbons < 1:
            msg = 'carbon count must be > 0 (was: {})'
            raise LipidSemanticError('carbons', msg.format(self.carbons))
        _check_double_bond_capacity('db_count', self.carbons, self.double_bonds.count)
        for position in self.double_bonds.positions:
            if not 1 <= position <= self.carbons - 1:
                msg = 'double bond position {} is outside of 1..{}'
                raise LipidSemanticError('db_positions', msg.format(position, self.carbons - 1))
        for group in self.children:
            if group.position is not None and not 1 <= group.position <= self.carbons:
                msg = 'position {} of functional group {} is outside of 1..{}'
                raise LipidSemanticError('functional_group', msg.format(group.position, group.name, self.carbons))
        # the backbone has to be able to hold all of the groups
        self.get_elements()

    @property
    def functional_groups(self):
        return self.children

    @property
    def hydroxyl_count(self):
        return sum(group.count for group in self.children if group.name == 'OH')

    @property
    def is_placeholder(self):
        return self.bond_type is ChainBondType.NONE

    def get_gain(self):
        if self.is_placeholder:
            return Formula({'H': 1})
        gain = _chain_base_elements(self.carbons, self.double_bonds.count, [self.bond_type])
        for group in self.children:
            gain = gain.add(group.get_gain())
        return gain

    def get_loss(self):
        loss = Formula()
        for group in self.children:
            loss = loss.add(group.get_loss())
        return loss

    def get_elements(self):
        """
        elemental composition of the chain including its functional groups

        Returns
        -------
        elements : ``pyliquid.formula.Formula``
            chain formula
        """
        return self.get_gain().subtract(self.get_loss())

    def positions_known(self):
        return self.double_bonds.positions_known and all(group.positions_known() for group in self.children)

    def geometry_known(self):
        return self.double_bonds.geometry_known and all(group.geometry_known() for group in self.children)

    def has_stereo(self):
        return any(group.has_stereo() for group in self.children)

    def copy(self):
        return FattyAcid(self.carbons, double_bonds=self.double_bonds, bond_type=self.bond_type,
                         functional_groups=[group.copy() for group in self.children], sn_position=self.sn_position,
                         validate=False)

    def strip(self, level):
        """ copy without the information above ``level`` """
        if level < LipidLevel.STRUCTURE_DEFINED:
            groups = merge_functional_groups(self.children, level)
        else:
            groups = [group.strip(level) for group in self.children]
        return FattyAcid(self.carbons, double_bonds=self.double_bonds.strip(level), bond_type=self.bond_type,
                         functional_groups=groups,
                         sn_position=self.sn_position if level >= LipidLevel.SN_POSITION else 0, validate=False)

    def structure_key(self):
        return (self.name, self.bond_type.value, self.carbons, self.double_bonds.count,
                tuple(sorted(self.double_bonds.positions.items())),
                tuple(group.structure_key() for group in self.children))

    def to_string(self, level):
        """ shorthand rendering of the chain at ``level`` (e.g. 'O-16:0', '18:1(9Z);12OH') """
        if self.is_placeholder:
            return '0:0'
        s = '{}{}:{}'.format(_BOND_PREFIXES.get(self.bond_type, ''), self.carbons, self.double_bonds.count)
        s += self.double_bonds.to_string(level)
        return s + _render_groups(self.children, level)

    def __repr__(self):
        s = 'FattyAcid(carbons={}, double_bonds={}, bond_type={}, sn_position={})'
        return s.format(self.carbons, self.double_bonds.count, self.bond_type.name, self.sn_position)


class LipidSpeciesInfo():
    """
    sum composition of a lipid: total carbons, total double bonds, merged functional groups and the bond types of
    the chains it is made of

    Parameters
    ----------
    carbons : ``int``
        total carbon count
    double_bonds : ``int``
        total double bond count
    layout : ``list(ChainBondType)``
        bond types of the (real) chains
    functional_groups : ``list(FunctionalGroup)``, optional
        functional groups over all chains (positions are dropped)
    """

    def __init__(self, carbons, double_bonds, layout, functional_groups=None):
        if carbons < 0:
            msg = 'carbon count must be >= 0 (was: {})'
            raise LipidSemanticError('carbons', msg.format(carbons))
        if double_bonds < 0:
            msg = 'double bond count must be >= 0 (was: {})'
            raise LipidSemanticError('db_count', msg.format(double_bonds))
        _check_double_bond_capacity('db_count', carbons, double_bonds)
        self.carbons = carbons
        self.double_bonds = double_bonds
        self.layout = list(layout)
        self.functional_groups = merge_functional_groups(functional_groups or [])
        self.get_elements()

    @classmethod
    def from_chains(cls, chains):
        """ sum composition of a list of chains, empty slots are ignored """
        real = [chain for chain in chains if not chain.is_placeholder]
        groups = [group for chain in real for group in chain.functional_groups]
        return cls(sum(chain.carbons for chain in real), sum(chain.double_bonds.count for chain in real),
                   [chain.bond_type for chain in real], groups)

    @property
    def hydroxyl_count(self):
        return sum(group.count for group in self.functional_groups if group.name == 'OH')

    def copy(self):
        return LipidSpeciesInfo(self.carbons, self.double_bonds, self.layout, self.functional_groups)

    def get_elements(self):
        elements = _chain_base_elements(self.carbons, self.double_bonds, self.layout)
        for group in self.functional_groups:
            elements = elements.add(group.get_gain())
        for group in self.functional_groups:
            elements = elements.subtract(group.get_loss())
        return elements

    def to_string(self):
        if ChainBondType.ETHER in self.layout:
            prefix = _BOND_PREFIXES[ChainBondType.ETHER]
        elif ChainBondType.PLASMENYL in self.layout:
            prefix = _BOND_PREFIXES[ChainBondType.PLASMENYL]
        else:
            prefix = ''
        s = '{}{}:{}'.format(prefix, self.carbons, self.double_bonds)
        return s + _render_groups(self.functional_groups, LipidLevel.SPECIES)

    def __eq__(self, other):
        if not isinstance(other, LipidSpeciesInfo):
            return NotImplemented
        return (self.carbons, self.double_bonds, self.to_string()) == (other.carbons, other.double_bonds,
                                                                      other.to_string())


class Headgroup():
    """
    head group of a lipid: lipid class metadata from the registry plus optional decorators (e.g. sugars)

    Parameters
    ----------
    name : ``str``
        class abbreviation or synonym
    decorators : ``list(str)``, optional
        names of head group decorators, in the order they were written
    """

    def __init__(self, name, decorators=None):
        self.class_info = lookup_lipid_class(name)
        self.lipid_class = self.class_info['class_abbrev']
        self.category = LipidCategory[self.class_info['category']]
        self.decorators = []
        for decorator_name in decorators or []:
            decorator = lookup_decorator(decorator_name)
            self.decorators.append(FunctionalGroup(decorator_name, gain=decorator['gain'], loss=decorator['loss']))

    @property
    def slots(self):
        return self.class_info['slots']

    @property
    def chain_count(self):
        return self.class_info['chains']

    @property
    def has_lcb(self):
        return self.class_info['lcb']

    @property
    def charge(self):
        return self.class_info['charge']

    def copy(self):
        return Headgroup(self.lipid_class, [decorator.name for decorator in self.decorators])

    def get_elements(self):
        elements = Formula(self.class_info['formula'])
        for decorator in self.decorators:
            elements = elements.add(decorator.get_gain())
        for decorator in self.decorators:
            elements = elements.subtract(decorator.get_loss())
        return elements

    def to_string(self, level):
        if level < LipidLevel.STRUCTURE_DEFINED:
            names = [lookup_decorator(decorator.name)['generic'] for decorator in self.decorators]
        else:
            names = [decorator.name for decorator in self.decorators]
        return '-'.join(names + [self.lipid_class])


def _infer_level(chains):
    """ highest level that the information in ``chains`` supports """
    if not chains:
        return LipidLevel.SPECIES
    if any(chain.sn_position == 0 for chain in chains):
        return LipidLevel.MOLECULAR_SPECIES
    if not all(chain.positions_known() for chain in chains):
        return LipidLevel.SN_POSITION
    if not all(chain.geometry_known() for chain in chains):
        return LipidLevel.STRUCTURE_DEFINED
    if any(chain.has_stereo() for chain in chains):
        return LipidLevel.COMPLETE_STRUCTURE
    return LipidLevel.FULL_STRUCTURE


class LipidSpecies():
    """
    a lipid at a given structural level

    Attributes
    ----------
    headgroup : ``Headgroup``
        head group / lipid class
    chains : ``list(FattyAcid)``
        chains, empty below MOLECULAR_SPECIES, without empty slots at MOLECULAR_SPECIES and ordered by sn position
        (including empty slots) from SN_POSITION on
    info : ``LipidSpeciesInfo``
        sum composition
    level : ``LipidLevel``
        structural level
    """

    def __init__(self, headgroup, chains=None, info=None, level=None):
        """
        inits a new instance of LipidSpecies

        Parameters
        ----------
        headgroup : ``Headgroup``
            head group / lipid class
        chains : ``list(FattyAcid)``, optional
            chains, sn positions decide between MOLECULAR_SPECIES and the sn-resolved levels
        info : ``LipidSpeciesInfo``, optional
            sum composition, required when no chains are given
        level : ``LipidLevel``, optional
            declared level, inferred from the chains if not provided. Declaring a level below the inferred one drops
            the extra information, declaring one above it raises a LipidSemanticError
        """
        self.headgroup = headgroup
        chains = list(chains) if chains else []
        if chains:
            self._validate_chains(chains)
            self.info = LipidSpeciesInfo.from_chains(chains)
        elif info is not None:
            self.info = info.copy()
        else:
            raise LipidSemanticError('LipidSpecies', 'either chains or a sum composition is required')
        inferred = _infer_level(chains)
        if level is None:
            level = inferred
        elif level > inferred:
            msg = 'declared level {} is above the level supported by the structure ({})'
            raise LipidSemanticError('level', msg.format(LipidLevel(level).name, inferred.name))
        self.level = LipidLevel(level)
        if self.level < LipidLevel.MOLECULAR_SPECIES:
            self.chains = []
        elif self.level == LipidLevel.MOLECULAR_SPECIES:
            real = [chain.strip(self.level) for chain in chains if not chain.is_placeholder]
            lcb = [chain for chain in real if chain.bond_type is ChainBondType.LCB]
            self.chains = lcb + [chain for chain in real if chain.bond_type is not ChainBondType.LCB]
        else:
            self.chains = [chain.strip(self.level) for chain in chains]

    def _validate_chains(self, chains):
        real = [chain for chain in chains if not chain.is_placeholder]
        if len(real) > self.headgroup.chain_count:
            msg = 'class {} takes at most {} chains (got: {})'
            raise LipidSemanticError('chain_list', msg.format(self.headgroup.lipid_class, self.headgroup.chain_count,
                                                              len(real)))
        if len(chains) > self.headgroup.slots:
            msg = 'class {} has {} chain positions (got: {})'
            raise LipidSemanticError('chain_list', msg.format(self.headgroup.lipid_class, self.headgroup.slots,
                                                              len(chains)))
        n_lcb = sum(1 for chain in real if chain.bond_type is ChainBondType.LCB)
        if n_lcb > (1 if self.headgroup.has_lcb else 0):
            msg = 'class {} cannot carry {} long chain base(s)'
            raise LipidSemanticError('chain_list', msg.format(self.headgroup.lipid_class, n_lcb))

    @property
    def lipid_class(self):
        return self.headgroup.lipid_class

    @property
    def category(self):
        return self.headgroup.category

    def downgrade(self, level):
        """
        returns a copy of this lipid at a lower (or the same) structural level

        Parameters
        ----------
        level : ``LipidLevel``
            target level

        Returns
        -------
        lipid : ``LipidSpecies``
            downgraded copy
        """
        if level > self.level:
            raise LevelTooLowError(self.level, LipidLevel(level))
        return LipidSpecies(self.headgroup.copy(), self.chains, self.info, level)

    def get_elements(self):
        """
        elemental composition of the (neutral) lipid

        Returns
        -------
        elements : ``pyliquid.formula.Formula``
            lipid formula
        """
        elements = self.headgroup.get_elements()
        if self.chains:
            for chain in self.chains:
                elements = elements.add(chain.get_elements())
            missing = self.headgroup.slots - len(self.chains)
        else:
            elements = elements.add(self.info.get_elements())
            missing = self.headgroup.slots - len(self.info.layout)
        # every empty chain position is capped with a hydrogen
        return elements.add({'H': 1}, missing)

    def get_lipid_string(self, level=None):
        """
        canonical shorthand name of the lipid at ``level``

        Parameters
        ----------
        level : ``LipidLevel``, optional
            level to render at, defaults to the level of the lipid, raises LevelTooLowError if above it

        Returns
        -------
        name : ``str``
            lipid name
        """
        level = self.level if level is None else LipidLevel(level)
        lipid = self.downgrade(level) if level != self.level else self
        return lipid._render()

    def _render(self):
        if self.level == LipidLevel.CATEGORY:
            return self.category.name
        headgroup = self.headgroup.to_string(self.level)
        if self.level == LipidLevel.CLASS:
            return headgroup
        if self.level == LipidLevel.SPECIES:
            return '{} {}'.format(headgroup, self.info.to_string())
        if self.level == LipidLevel.MOLECULAR_SPECIES:
            lcb = [chain for chain in self.chains if chain.bond_type is ChainBondType.LCB]
            others = [chain for chain in self.chains if chain.bond_type is not ChainBondType.LCB]
            others.sort(key=lambda c: (c.carbons, c.double_bonds.count, c.to_string(self.level)))
            return '{} {}'.format(headgroup, '_'.join(chain.to_string(self.level) for chain in lcb + others))
        return '{} {}'.format(headgroup, '/'.join(chain.to_string(self.level) for chain in self.chains))

    def __eq__(self, other):
        if not isinstance(other, LipidSpecies):
            return NotImplemented
        return self.level == other.level and self.get_lipid_string() == other.get_lipid_string()

    def __hash__(self):
        return hash((self.level, self.get_lipid_string()))

    def __str__(self):
        return self.get_lipid_string()

    def __repr__(self):
        return 'LipidSpecies("{}", level={})'.format(self.get_lipid_string(), self.level.name)


class Adduct():
    """
    adduct ion, e.g. [M+H]1+ or [M+NH4]1+

    Parameters
    ----------
    terms : ``list(tuple(int, int, str, pyliquid.formula.Formula))``
        adduct terms in the order they were written: (sign (+1 or -1), multiplier, formula text, formula)
    charge : ``int``, default=1
        absolute charge
    charge_sign : ``int``, default=1
        +1 or -1
    """

    def __init__(self, terms, charge=1, charge_sign=1):
        if charge < 1:
            msg = 'adduct charge must be >= 1 (was: {})'
            raise LipidSemanticError('adduct_info', msg.format(charge))
        if charge_sign not in (1, -1):
            msg = 'adduct charge sign must be +1 or -1 (was: {})'
            raise LipidSemanticError('adduct_info', msg.format(charge_sign))
        self.terms = list(terms)
        self.charge = charge
        self.charge_sign = charge_sign

    @property
    def signed_charge(self):
        return self.charge * self.charge_sign

    def get_gain(self):
        gain = Formula()
        for sign, multiplier, _, formula in self.terms:
            if sign > 0:
                gain = gain.add(formula, multiplier)
        return gain

    def get_loss(self):
        loss = Formula()
        for sign, multiplier, _, formula in self.terms:
            if sign < 0:
                loss = loss.add(formula, multiplier)
        return loss

    def to_string(self):
        terms = ''.join('{}{}{}'.format('+' if sign > 0 else '-', multiplier if multiplier > 1 else '', text)
                        for sign, multiplier, text, _ in self.terms)
        return '[M{}]{}{}'.format(terms, self.charge, '+' if self.charge_sign > 0 else '-')

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return 'Adduct("{}")'.format(self.to_string())


class LipidAdduct():
    """
    top level parse result: a lipid and (optionally) the adduct it was observed as

    Attributes
    ----------
    lipid : ``LipidSpecies``
        the lipid
    adduct : ``Adduct``
        adduct, None for the neutral lipid
    """

    def __init__(self, lipid, adduct=None):
        self.lipid = lipid
        self.adduct = adduct

    @property
    def level(self):
        return self.lipid.level

    @property
    def category(self):
        return self.lipid.category

    @property
    def lipid_class(self):
        return self.lipid.lipid_class

    @property
    def charge(self):
        return self.adduct.signed_charge if self.adduct is not None else self.lipid.headgroup.charge

    def get_lipid_string(self, level=None):
        """
        canonical shorthand name at ``level`` (defaults to the level of the lipid), including the adduct

        Parameters
        ----------
        level : ``LipidLevel``, optional
            level to render at

        Returns
        -------
        name : ``str``
            lipid name
        """
        name = self.lipid.get_lipid_string(level)
        if self.adduct is not None:
            name += self.adduct.to_string()
        return name

    def get_neutral_formula(self):
        return self.lipid.get_elements()

    def get_sum_formula(self):
        """
        formula of the ion (or of the neutral lipid if there is no adduct)

        Returns
        -------
        formula : ``pyliquid.formula.Formula``
            sum formula
        """
        formula = self.get_neutral_formula()
        if self.adduct is not None:
            formula = formula.add(self.adduct.get_gain()).subtract(self.adduct.get_loss())
        return formula

    def get_neutral_mass(self, isotope=DEFAULT_ISOTOPE):
        return self.get_neutral_formula().mass(isotope)

    def get_mass(self, isotope=DEFAULT_ISOTOPE):
        """
        mass of the neutral lipid, or m/z of the ion if there is a charged adduct

        Parameters
        ----------
        isotope : ``str``, default='monoisotopic'
            'monoisotopic' or 'average'

        Returns
        -------
        mass : ``float``
            mass (Da) or m/z
        """
        mass = self.get_sum_formula().mass(isotope)
        charge = self.charge
        if charge == 0:
            return mass
        return (mass - charge * ELECTRON_REST_MASS) / abs(charge)

    def __eq__(self, other):
        if not isinstance(other, LipidAdduct):
            return NotImplemented
        return self.lipid == other.lipid and str(self.adduct) == str(other.adduct)

    def __hash__(self):
        return hash((self.lipid, str(self.adduct)))

    def __str__(self):
        return self.get_lipid_string()

    def __repr__(self):
        return 'LipidAdduct("{}", level={})'.format(self.get_lipid_string(), self.level.name)
