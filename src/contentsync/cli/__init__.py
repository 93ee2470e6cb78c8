"""Command-line interface for contentsync."""

from __future__ import annotations

import asyncio as asyncio
import logging as logging

from contentsync import ContentSync as ContentSync
from contentsync import load_config as load_config
from contentsync.cli.app import main as main
from contentsync.cli.commands import analyze as analyze_command
from contentsync.cli.commands import health as health_command
from contentsync.cli.commands import sync as sync_command
from contentsync.cli.parser import build_parser as build_parser

_format_report = analyze_command.format_report
_format_summary = sync_command.format_sync_summary

_run_analyze = analyze_command.run_analyze
_run_sync = sync_command.run_sync
_run_health = health_command.run_health
