"""
This runs a Python module that declares datatypes and pattern-dispatched functions.

{0}

For example:

    variety examples/streams.py

will run streams.py, or else try to explain why not.

    variety -cc examples/streams.py

will also show the forcing plan and canonical rows of every function it compiles.
"""
import sys, argparse, runpy
from pathlib import Path

parser = argparse.ArgumentParser(
	prog="variety",
	description="Run a module of datatype declarations and pattern-dispatched functions.",
)
parser.add_argument("program", help="try examples/streams.py for example.")
parser.add_argument('-c', "--check", action="count", help="Report each compiled function's forcing plan; twice for canonical rows too.")

def run(args):
	from .diagnostics import Report, VarietyError
	from . import compiler
	report = Report(verbose=args.check)
	prior, compiler.REPORT = compiler.REPORT, report
	try:
		runpy.run_path(str(Path.cwd() / args.program), run_name="__main__")
	except VarietyError as ex:
		report.issue(ex)
		report.complain_to_console()
		return 1
	finally:
		compiler.REPORT = prior
	if args.check:
		print("Looks plausible to me.", file=sys.stderr)
	return 0

def main():
	if len(sys.argv) > 1:
		exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))
