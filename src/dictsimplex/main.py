"""
Entry point for the dictionary simplex solver.

Solves every dictionary file given on the command line and prints one line
per file: the optimal objective value, INFEASIBLE or UNBOUNDED.
"""

import argparse
import csv
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from .data_models import PivotRule, SolverConfig, format_number
from .errors import SimplexError
from .parser import read_dictionary
from .simplex_solver import DictionarySimplexSolver, pivot_once


def setup_logging(verbose: bool = False) -> None:
    """
    Configure logging for the application.

    Args:
        verbose: If True, set logging level to DEBUG
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description='Solve linear programs given as simplex dictionaries',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    parser.add_argument('paths', nargs='+',
                        help='Dictionary files, or folders whose *.dict files are solved in order')
    parser.add_argument('-r', '--rule', choices=[r.value for r in PivotRule],
                        default=PivotRule.BLAND.value, help='Pivot rule')
    parser.add_argument('-m', '--max-iter', type=int, default=SolverConfig.max_iterations,
                        help='Maximum pivots per phase')
    parser.add_argument('-e', '--tolerance', type=float, default=SolverConfig.tolerance,
                        help='Tolerance of sign tests')
    parser.add_argument('--single-pivot', action='store_true',
                        help='Perform one pivot and report entering, leaving and objective')
    parser.add_argument('--verify', action='store_true',
                        help='Cross-check results against scipy.optimize.linprog')
    parser.add_argument('-o', '--output-csv', type=str, default=None,
                        help='Write a summary CSV to this file')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')
    return parser.parse_args(argv)


def collect_files(paths: List[str]) -> List[Path]:
    """Expand folders to their sorted *.dict files."""
    files: List[Path] = []
    for p in paths:
        path = Path(p)
        if path.is_dir():
            files.extend(sorted(path.glob('*.dict')))
        else:
            files.append(path)
    return files


def save_summary(rows: List[Dict], output_file: Path) -> None:
    """Save per-file results to CSV."""
    fieldnames = ["file", "result", "status", "objective", "iterations", "phase_one",
                  "time", "reference_objective", "objective_gap", "error"]

    output_file.parent.mkdir(parents=True, exist_ok=True)
    with open(output_file, 'w', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames, extrasaction='ignore')
        writer.writeheader()
        for row in rows:
            writer.writerow(row)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_arguments(argv)
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    try:
        config = SolverConfig(rule=args.rule, max_iterations=args.max_iter,
                              tolerance=args.tolerance, verify=args.verify)
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    solver = DictionarySimplexSolver(config)
    rows: List[Dict] = []
    exit_code = 0

    for path in collect_files(args.paths):
        try:
            if args.single_pivot:
                report = pivot_once(read_dictionary(path, tolerance=config.tolerance), config)
                if report.status == "PIVOTED":
                    result = f"{report.entering} {report.leaving} {format_number(report.objective)}"
                else:
                    result = report.status
                rows.append({"file": str(path), "result": result, "status": report.status,
                             "objective": report.objective})
            else:
                solution = solver.solve_file(path)
                result = solution.format_result()
                rows.append({
                    "file": str(path),
                    "result": result,
                    "status": solution.status.value,
                    "objective": solution.objective,
                    "iterations": solution.iterations,
                    "phase_one": solution.phase_one,
                    "time": f"{solution.time:.6f}",
                    "reference_objective": solution.reference_objective,
                    "objective_gap": solution.objective_gap,
                })
        except (SimplexError, OSError) as e:
            logger.error(f"{path}: {e}")
            rows.append({"file": str(path), "result": "ERROR", "error": str(e)})
            exit_code = 1
            continue

        print(f"{path}: {result}")

    if args.output_csv:
        save_summary(rows, Path(args.output_csv))

    return exit_code


if __name__ == '__main__':
    sys.exit(main())
