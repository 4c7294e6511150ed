"""
pyliquid/__init__.py

    lipid name parsing in the shorthand, Goslin, LIPID MAPS, SwissLipids, HMDB and fatty acid nomenclatures, with
    structural levels, sum formulas and masses
"""


from pyliquid.parser import LipidParser, parse_lipid_name
from pyliquid.formula import Formula
from pyliquid.lipids import (
    LipidLevel, LipidCategory, ChainBondType, DoubleBonds, FunctionalGroup, FattyAcid, LipidSpeciesInfo, Headgroup,
    LipidSpecies, Adduct, LipidAdduct
)
from pyliquid.errors import (
    LipidError, EmptyInputError, InputTooLongError, LipidSyntaxError, LipidSemanticError, UnknownNameError,
    UnknownElementError, NegativeElementCountError, LevelTooLowError, NoMatchingDialectError, HandlerContractError,
    NestingTooDeepError
)


__version__ = '1.0.0'
