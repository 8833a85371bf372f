"""Shared test fixtures: sample TypeScript sources, configs, analyzers."""

from __future__ import annotations

import logging
import textwrap
from pathlib import Path
from typing import Callable, List

import pytest
import structlog

from tsnarrow.config.schema import TsNarrowConfig
from tsnarrow.parsing.nodes import node_text, walk
from tsnarrow.parsing.tree import SourceUnit, parse_source
from tsnarrow.service import Analyzer


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo configure_logging() calls made by CLI tests."""
    yield
    logging.getLogger().handlers.clear()
    structlog.reset_defaults()


@pytest.fixture
def config(tmp_path: Path) -> TsNarrowConfig:
    cfg = TsNarrowConfig()
    cfg.analysis.cache_dir = str(tmp_path / "cache")
    cfg.batch.concurrency = 3
    cfg.batch.progress_interval_ms = 0
    return cfg


@pytest.fixture
def analyzer(config: TsNarrowConfig) -> Analyzer:
    return Analyzer(config)


@pytest.fixture
def write_source(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write dedented TypeScript source under tmp_path/src and return the path."""

    def _write(name: str, source: str) -> Path:
        path = tmp_path / "src" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(source), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def parse() -> Callable[..., SourceUnit]:
    def _parse(source: str, name: str = "sample.ts") -> SourceUnit:
        return parse_source(name, textwrap.dedent(source))

    return _parse


@pytest.fixture
def any_nodes() -> Callable[[SourceUnit], List]:
    """Return every `any` type node of a unit, in document order."""

    def _find(unit: SourceUnit) -> List:
        return [n for n in walk(unit.root) if n.type == "predefined_type" and node_text(n) == "any"]

    return _find


@pytest.fixture
def sample_module_source() -> str:
    """A plain module exercising rule, inference, name and default paths."""
    return """\
        export function process(data: any) {
          return 1;
        }

        export function check(flag: any) {
          if (flag === true) {
            return 1;
          }
          return 0;
        }

        interface Stats {
          userCount: any;
          createdAt: any;
        }

        export function wrap(value: any): Promise<any> {
          return Promise.resolve(value);
        }
    """


@pytest.fixture
def sample_component_source() -> str:
    """A React module with typed, destructured and member-access props."""
    return """\
        import React from "react";

        interface BaseProps {
          /** Element id */
          id: string;
          className?: string;
        }

        interface ButtonProps extends BaseProps {
          /**
           * Click handler
           */
          onClick: () => void;
          label?: string;
          id: number;
        }

        export function Button(props: ButtonProps) {
          return <button onClick={props.onClick}>{props.label}</button>;
        }

        export function Chip({ id, onClick }) {
          return null;
        }

        const Counter = (props) => {
          const next = props.count + 1;
          if (props.onChange) {
            props.onChange(next);
          }
          return <div>{props.label}</div>;
        };
    """
