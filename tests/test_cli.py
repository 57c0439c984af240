from __future__ import annotations

import asyncio

import httpx
from click.testing import CliRunner

from textgraph import __version__
from textgraph.cli.main import _fetch_wikipedia, cli
from textgraph.knowledge_graph import GraphWorkspace


def test_version():
    result = CliRunner().invoke(cli, ["version"])
    assert result.exit_code == 0
    assert result.output.strip() == __version__


def test_extract_file(tmp_path):
    path = tmp_path / "sample.txt"
    path.write_text("Dr. Sarah Johnson works at Stanford University.", encoding="utf-8")
    result = CliRunner().invoke(cli, ["--fixed", "0.8", "extract", str(path)])
    assert result.exit_code == 0, result.output
    assert "2 entities, 1 relationships" in result.output


def test_extract_plain_text(tmp_path):
    path = tmp_path / "plain.txt"
    path.write_text("the quick fox runs", encoding="utf-8")
    result = CliRunner().invoke(cli, ["extract", str(path)])
    assert result.exit_code == 0, result.output
    assert "No entities found" in result.output


def test_sample_rejects_unknown_name():
    result = CliRunner().invoke(cli, ["sample", "poetry"])
    assert result.exit_code != 0


def test_sample_given_twice_is_loaded_once():
    result = CliRunner().invoke(cli, ["--fixed", "0.8", "sample", "academic", "academic"])
    assert result.exit_code == 0, result.output
    assert result.exception is None
    assert "already loaded" in result.output


def test_wikipedia_title_given_twice_is_loaded_once(aggregator):
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url)
        return httpx.Response(200, json={"title": "Grace Hopper", "extract": "Grace Hopper met Alan Turing."})

    ws = GraphWorkspace(aggregator)
    failed = asyncio.run(_fetch_wikipedia(ws, ["Grace Hopper", "Grace Hopper"], transport=httpx.MockTransport(handler)))
    assert failed == 0
    assert len(ws.documents) == 1
    assert "grace-hopper" in ws.graph.entity_ids()
