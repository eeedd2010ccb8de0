#!/usr/bin/env python3
"""
CLI tool for learning log templates and filtering out known log lines.

Usage:
    python map_logs.py --map --save filters.txt < server.log
    python map_logs.py --load filters.txt --passive < today.log
"""

import click
import logging
import os
import sys
from typing import Optional, TextIO

from tqdm import tqdm

# Add the package to Python path
sys.path.insert(0, os.path.dirname(__file__))

from logmap import LogFilters, FilterStateError
from logmap.io_utils import JSONLWriter, ScanReport, load_filters, save_filters


def _lines(stream: TextIO, verbose: bool):
    """Yield input lines without their line terminator."""
    for line in tqdm(stream, desc="Mapping lines", unit=" lines",
                     file=sys.stderr, disable=not verbose):
        yield line.rstrip("\r\n")


@click.command()
@click.option('--load', '-l', 'load_path',
              type=click.Path(),
              help='Load filters from given path and use them to scan logs from input')
@click.option('--save', '-s', 'save_path',
              type=click.Path(),
              help='Save filters under given path')
@click.option('--columns', '-c',
              type=click.IntRange(min=0),
              help='Ignore first N columns of input (default: 2). Columns are created '
                   'by splitting lines by .,:/[]{}() \'" so this allows dropping time stamps')
@click.option('--allowed-alternatives', '-a', 'allowed_alternatives',
              type=click.IntRange(min=0),
              help='Number of words of each new line allowed not to match (default: 0, '
                   'recommended when analysing: 1 or 2)')
@click.option('--keep-numeric', '-i',
              is_flag=True,
              help='Do not ignore words containing only numbers')
@click.option('--map', '-m', 'map_mode',
              is_flag=True,
              help='Learn filters from input (extends loaded filters if --load was used)')
@click.option('--passive', '-p',
              is_flag=True,
              help='Print input lines not matching any filter')
@click.option('--debug', '-d',
              is_flag=True,
              help='Print internal data structure')
@click.option('--input', '--in', 'input_file',
              type=click.File('r', encoding='utf-8', errors='ignore'),
              default='-',
              help='Input log file (default: standard input)')
@click.option('--export-jsonl',
              type=click.Path(),
              help='Export learned templates as JSONL')
@click.option('--verbose', '-v',
              is_flag=True,
              help='Enable verbose output')
def map_logs(load_path: Optional[str],
             save_path: Optional[str],
             columns: Optional[int],
             allowed_alternatives: Optional[int],
             keep_numeric: bool,
             map_mode: bool,
             passive: bool,
             debug: bool,
             input_file: TextIO,
             export_jsonl: Optional[str],
             verbose: bool):
    """
    Learn log line templates and report lines not matching any of them.

    Examples:

    \b
    # Learn templates from a log allowing one differing word per line
    python map_logs.py -a 1 --map --save filters.txt --in server.log

    \b
    # Print only the lines of a new log not seen before
    python map_logs.py --load filters.txt --passive --in today.log
    """

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if load_path:
        try:
            log_filters = load_filters(load_path)
        except FilterStateError as e:
            raise click.UsageError(str(e))
        if verbose:
            click.echo(f"Loaded {log_filters.template_count} filters from: {load_path}", err=True)
    else:
        log_filters = LogFilters()

    if columns is not None:
        log_filters.settings.ignore_first_columns = columns
    if allowed_alternatives is not None:
        log_filters.settings.max_allowed_new_alternatives = allowed_alternatives
    if keep_numeric:
        log_filters.settings.ignore_numeric_words = False

    report = ScanReport()

    if map_mode:
        for line in _lines(input_file, verbose):
            before = log_filters.template_count
            log_filters.learn(line)
            report.add_learned(before, log_filters.template_count)

    if debug:
        for line in log_filters.dump():
            click.echo(line)

    if passive:
        for line in _lines(input_file, verbose):
            template_id = log_filters.matcher.find_best_match(log_filters.line_to_words(line))
            if template_id is None:
                report.add_unknown(line)
                click.echo(line)
            else:
                report.add_known(template_id)

    if export_jsonl:
        with JSONLWriter(export_jsonl) as writer:
            writer.write_records(log_filters.records())

    if save_path:
        try:
            save_filters(log_filters, save_path)
        except FilterStateError as e:
            raise click.UsageError(str(e))
        click.echo(f"Successfully wrote to {save_path}", err=True)

    if verbose:
        summary = report.get_summary()
        click.echo("Results:", err=True)
        click.echo(f"   • Learned lines: {summary['learned_lines']}", err=True)
        click.echo(f"   • New templates: {summary['created_templates']}", err=True)
        click.echo(f"   • Total templates: {log_filters.template_count}", err=True)
        if summary['scanned_lines']:
            click.echo(f"   • Known lines: {summary['known_lines']} "
                       f"({summary['known_rate']:.1f}%)", err=True)
            click.echo(f"   • Unknown lines: {summary['unknown_lines']}", err=True)

        if summary['top_templates']:
            records = log_filters.records()
            click.echo(f"\n📋 Most used templates:", err=True)
            for template_id, count in summary['top_templates']:
                click.echo(f"   {template_id:3}. {count:6} lines  {records[template_id]}", err=True)

        if summary['unknown_samples']:
            click.echo(f"\n🔍 Sample unknown lines:", err=True)
            for i, sample in enumerate(summary['unknown_samples'][:5], 1):
                click.echo(f"   {i}. {sample}", err=True)
            if len(summary['unknown_samples']) > 5:
                click.echo(f"   ... and {len(summary['unknown_samples']) - 5} more", err=True)


def main():
    map_logs()


if __name__ == '__main__':
    main()
