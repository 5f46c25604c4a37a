"""Tests for the job-catalog CLI."""

import json

import pytest

from job_catalog import main as cli
from job_catalog.catalog import build_catalog
from job_catalog.linkcheck import LinkStatus


@pytest.fixture
def catalog(make_posting):
    return build_catalog(
        [
            make_posting(slug="first", title="First Job", featured=True, area="Noord"),
            make_posting(
                slug="second",
                title="Second Job",
                external_url="https://example.com/second",
            ),
        ]
    )


def test_list_prints_every_posting(catalog, capsys):
    assert cli.main(["list"], catalog=catalog) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 2
    assert lines[0].startswith("* first\tFirst Job")
    assert lines[1].startswith("  second\tSecond Job")


def test_list_featured(catalog, capsys):
    cli.main(["list", "--featured"], catalog=catalog)
    out = capsys.readouterr().out
    assert "first" in out
    assert "second" not in out


def test_show_posting(catalog, capsys):
    assert cli.main(["show", "first"], catalog=catalog) == 0
    out = capsys.readouterr().out
    assert "First Job at Test Org" in out
    assert "Area: Noord" in out
    assert "Flags: Featured" in out
    assert "Link: /jobs/first" in out


def test_show_unknown_slug(catalog, capsys):
    assert cli.main(["show", "missing"], catalog=catalog) == 1
    assert "missing" in capsys.readouterr().err


def test_export_json(catalog, tmp_path):
    output = tmp_path / "out" / "jobs.json"
    assert cli.main(["export", "--format", "json", "--output", str(output)], catalog=catalog) == 0
    data = json.loads(output.read_text(encoding="utf-8"))
    assert [row["slug"] for row in data] == ["first", "second"]


def test_export_csv_featured(catalog, tmp_path):
    output = tmp_path / "jobs.csv"
    cli.main(["export", "--output", str(output), "--featured"], catalog=catalog)
    lines = output.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert lines[1].startswith("first,")


class TestCheckLinks:
    def test_broken_link_sets_exit_code(self, catalog, capsys, monkeypatch):
        captured = {}

        def fake_check_links(postings, **kwargs):
            captured.update(kwargs)
            return [
                LinkStatus(
                    slug="second",
                    url="https://example.com/second",
                    status_code=404,
                    final_url="https://example.com/second",
                    ok=False,
                    error="HTTP 404",
                )
            ]

        monkeypatch.setattr(cli, "check_links", fake_check_links)
        assert cli.main(["check-links", "--concurrency", "2"], catalog=catalog) == 1
        assert captured["concurrency"] == 2
        assert "HTTP 404\tsecond" in capsys.readouterr().out

    def test_all_links_ok(self, catalog, monkeypatch):
        monkeypatch.setattr(cli, "check_links", lambda postings, **kwargs: [])
        assert cli.main(["check-links"], catalog=catalog) == 0

    def test_concurrency_from_environment(self, catalog, monkeypatch):
        captured = {}

        def fake_check_links(postings, **kwargs):
            captured.update(kwargs)
            return []

        monkeypatch.setenv("JOB_CATALOG_CONCURRENCY", "7")
        monkeypatch.setattr(cli, "check_links", fake_check_links)
        cli.main(["check-links"], catalog=catalog)
        assert captured["concurrency"] == 7

    def test_invalid_concurrency(self, catalog):
        with pytest.raises(SystemExit):
            cli.main(["check-links", "--concurrency", "0"], catalog=catalog)
