"""Merge the test results of a completed test grid run and generate its reports."""

import argparse
import json
import logging
import sys

import requests

from gridresults import argparsing
from gridresults import junitparse
from gridresults import log
from gridresults import reportmanager
from gridresults.artifacts import MissingRunRootError
from gridresults.matrixdef import ExitCode, MalformedMatrixMapError, MatrixMap


def parse_args(args=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description='Merge sharded test results and generate reports')
    argparsing.arguments_logging(parser)
    argparsing.arguments_config(parser)
    argparsing.arguments_run(parser)
    return parser.parse_args(args=args)


def main(argv=None) -> int:
    args = parse_args(argv)
    log.setup(args)

    try:
        matrices = MatrixMap.load(args.run_path)
        return reportmanager.generate(matrices, args)
    except MissingRunRootError as e:
        logging.error('%s', e)
    except (json.JSONDecodeError, MalformedMatrixMapError) as e:
        logging.error('Corrupt matrix map: %s', e)
    except junitparse.ParseError as e:
        logging.error('Corrupt test result file: %s', e)
    # RequestException is an OSError, so it must be caught first
    except requests.exceptions.RequestException as e:
        logging.error('Cannot save timing baseline: %s', e)
    except FileNotFoundError as e:
        logging.error('Cannot load run: %s', e)
    except OSError as e:
        logging.error('File error: %s', e)
    return ExitCode.GENERAL_FAILURE


if __name__ == '__main__':
    sys.exit(main())
