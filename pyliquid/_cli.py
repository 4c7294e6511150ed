"""
pyliquid/_cli.py

    Command-line interface for batch parsing of lipid names
"""


import argparse
import os

import numpy as np
import xlsxwriter

from pyliquid._config import DIALECT_ORDER, MASS_DECIMALS
from pyliquid._registry import lipid_class_names
from pyliquid.errors import LipidError
from pyliquid.formula import Formula
from pyliquid.lipids import LipidLevel
from pyliquid.parser import LipidParser


# fixed columns of the batch output, followed by CHAIN_HEADERS for every chain
HEADERS = [
    'Normalized Name', 'Original Name', 'Grammar', 'Message', 'Adduct', 'Sum Formula', 'Mass', 'Category', 'Class',
    'Level', 'Total #C', 'Total #DB', 'Total #OH'
]
CHAIN_HEADERS = ['SN Position', '#C', '#DB', '#OH', 'Bond Type', 'DB Positions']


def load_names(path):
    """
    loads lipid names from a text file, one name per line (first tab separated column), lines starting with '#' are
    ignored

    Parameters
    ----------
    path : ``str``
        path to names file

    Returns
    -------
    names : ``list(str)``
        lipid names
    """
    names = np.loadtxt(path, dtype=str, delimiter='\t', comments='#', usecols=0, ndmin=1)
    return [str(name).strip() for name in names if str(name).strip()]


def _chain_values(chain):
    positions = ','.join('{}{}'.format(p, chain.double_bonds.positions[p])
                         for p in sorted(chain.double_bonds.positions))
    return [chain.sn_position, chain.carbons, chain.double_bonds.count, chain.hydroxyl_count, chain.bond_type.name,
            positions]


def _result_row(name, result, dialect, level):
    """ output row (without the chain columns) and the chains for a single parse result """
    if isinstance(result, Formula):
        mass = round(result.mass(), MASS_DECIMALS)
        return [str(result), name, dialect, '', '', str(result), mass, '', '', '', result['C'], '', ''], []
    if level is not None and level < result.level:
        lipid = result.lipid.downgrade(level)
    else:
        lipid = result.lipid
    normalized = lipid.get_lipid_string()
    if result.adduct is not None:
        normalized += result.adduct.to_string()
    row = [
        normalized, name, dialect, '', str(result.adduct) if result.adduct is not None else '',
        str(result.get_sum_formula()), round(result.get_mass(), MASS_DECIMALS), lipid.category.name,
        lipid.lipid_class, lipid.level.name, lipid.info.carbons, lipid.info.double_bonds, lipid.info.hydroxyl_count
    ]
    return row, lipid.chains


def parse_names(names, dialect=None, level=None, debug_flag=None, debug_cb=None):
    """
    parses a batch of lipid names, failures are reported in the output rows instead of being raised

    Parameters
    ----------
    names : ``list(str)``
        lipid names
    dialect : ``str``, optional
        only try this dialect
    level : ``pyliquid.lipids.LipidLevel``, optional
        report lipids at this level (or at their own level if it is lower)
    debug_flag : ``str``, optional
        specifies how to dispatch debugging messages, None to do nothing
    debug_cb : ``func``, optional
        callback function that takes the debugging message as an argument, can be None if
        debug_flag is not set to 'textcb'

    Returns
    -------
    headers : ``list(str)``
        column headers
    rows : ``list(list)``
        one output row per input name, padded to the same width
    """
    parser = LipidParser(dialects=[dialect] if dialect is not None else None)
    rows, max_chains = [], 0
    for name in names:
        try:
            result, used = parser.parse_dialect(name, debug_flag=debug_flag, debug_cb=debug_cb)
        except LipidError as err:
            rows.append(([''] + [name, '', str(err)] + ['' for _ in range(len(HEADERS) - 4)], []))
            continue
        rows.append(_result_row(name, result, used, level))
        max_chains = max(max_chains, len(rows[-1][1]))
    headers = list(HEADERS)
    for i in range(max_chains):
        headers += ['{} {}'.format(header, i + 1) for header in CHAIN_HEADERS]
    out = []
    for row, chains in rows:
        for chain in chains:
            row += _chain_values(chain)
        row += ['' for _ in range(len(headers) - len(row))]
        out.append(row)
    return headers, out


def write_results_tsv(headers, rows, path=None):
    """
    writes batch results as tab separated values, to stdout if no path is given

    Parameters
    ----------
    headers : ``list(str)``
        column headers
    rows : ``list(list)``
        output rows
    path : ``str``, optional
        output file
    """
    lines = ['\t'.join(headers)] + ['\t'.join([str(_) for _ in row]) for row in rows]
    if path is None:
        print('\n'.join(lines))
    else:
        with open(path, 'w') as f:
            f.write('\n'.join(lines) + '\n')


def write_results_xlsx(headers, rows, xlsx_file):
    """
    writes batch results to an excel spreadsheet

    Parameters
    ----------
    headers : ``list(str)``
        column headers
    rows : ``list(list)``
        output rows
    xlsx_file : ``str``
        filename to save the report under (must have .xlsx extension)
    """
    if os.path.splitext(xlsx_file)[-1] != '.xlsx':
        msg = 'write_results_xlsx: xlsx_file should have .xlsx extension (was: "{}")'
        raise ValueError(msg.format(xlsx_file))
    workbook = xlsxwriter.Workbook(xlsx_file, {'in_memory': True})
    sheet = workbook.add_worksheet('Lipids')
    fmt_header = workbook.add_format({'bold': True, 'font_size': 12})
    fmt_mass = workbook.add_format()
    fmt_mass.set_num_format('0.0000')
    fmt_failed = workbook.add_format({'font_color': 'red'})
    mass_col = headers.index('Mass')
    for i, header in enumerate(headers):
        sheet.write(0, i, header, fmt_header)
        sheet.set_column(i, i, max(12, len(header) + 2))
    sheet.set_column(0, 1, 32)
    sheet.set_column(3, 3, 40)
    for row, values in enumerate(rows, start=1):
        failed = values[3] != ''
        for col, value in enumerate(values):
            if col == mass_col and value != '':
                sheet.write(row, col, value, fmt_mass)
            elif failed and col == 3:
                sheet.write(row, col, value, fmt_failed)
            else:
                sheet.write(row, col, value)
    sheet.freeze_panes(1, 0)
    workbook.close()


def _setup_parse_subparser(subparser: argparse.ArgumentParser):
    """ set up the subparser for parse subcommand """
    subparser.add_argument(
        "NAME",
        nargs="*",
        help="lipid name(s) to parse"
    )
    subparser.add_argument(
        "--file",
        type=str,
        default=None,
        help="read lipid names from file, one per line (lines starting with # are ignored)"
    )
    subparser.add_argument(
        "--dialect",
        type=str,
        default=None,
        choices=list(DIALECT_ORDER),
        help="only try this naming dialect"
    )
    subparser.add_argument(
        "--level",
        type=str,
        default=None,
        choices=[level.name for level in LipidLevel],
        help="report lipids at this structural level (or lower, if less is known)"
    )
    subparser.add_argument(
        "--tsv",
        type=str,
        default=None,
        help="write results to file (.tsv) instead of stdout"
    )
    subparser.add_argument(
        "--xlsx",
        type=str,
        default=None,
        help="export results to spreadsheet (.xlsx)"
    )
    subparser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="print extra debugging messages"
    )


def _setup_arg_parser():
    """ set up the argument parser """
    # set up main parser
    parser = argparse.ArgumentParser(prog="pyliquid")
    _subparsers = parser.add_subparsers(
        title="subcommands",
        required=True,
        dest="subcommand"
    )
    # set up parse subparser
    _setup_parse_subparser(
        _subparsers.add_parser(
            "parse",
            help="parse lipid names"
        )
    )
    # classes subparser takes no arguments
    _subparsers.add_parser(
        "classes",
        help="list the supported lipid classes"
    )
    return parser


def run(argv=None):
    args = _setup_arg_parser().parse_args(argv)
    match args.subcommand:
        case "parse":
            names = list(args.NAME)
            if args.file is not None:
                names += load_names(args.file)
            headers, rows = parse_names(
                names,
                dialect=args.dialect,
                level=LipidLevel[args.level] if args.level is not None else None,
                debug_flag="text" if args.debug else None
            )
            write_results_tsv(headers, rows, args.tsv)
            if args.xlsx is not None:
                write_results_xlsx(headers, rows, args.xlsx)
        case "classes":
            print('\n'.join(lipid_class_names()))
