"""Unit tests for the hymnal-search command line."""

import json

import pytest

from hymnal_search.cli import build_argument_parser, format_line, format_summary, main
from hymnal_search.domain.model import Document


@pytest.fixture
def catalog(tmp_path):
    rows = [
        {"number": 1, "title": "Amazing Grace", "lyrics": "Amazing grace how sweet the sound"},
        {"number": 2, "title": "It Is Well", "lyrics": "When peace like a river"},
        {"number": 3, "title": "Grace Greater than Our Sin", "lyrics": "Marvelous grace"},
    ]
    (tmp_path / "hymnal.json").write_text(json.dumps({"hymns": rows}), encoding="utf-8")
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "datasets": [
                    {
                        "name": "Hymnal",
                        "path": "hymnal.json",
                        "mapping": {"number": "number", "title": "title", "lyrics": "lyrics"},
                    }
                ]
            }
        ),
        encoding="utf-8",
    )
    return path


def run(capsys, *argv):
    code = main([*argv, "--log-level", "warning"])
    return code, capsys.readouterr()


@pytest.mark.unit
@pytest.mark.usefixtures("restore_root_logger")
class TestMain:
    """main() loads the catalog, searches and prints a listing."""

    def test_prints_ranked_results(self, capsys, catalog):
        code, captured = run(capsys, "--catalog", str(catalog), "--query", "grace")

        assert code == 0
        assert captured.out.splitlines() == [
            "1. Amazing Grace",
            "3. Grace Greater than Our Sin",
            '2 results for "grace"',
        ]

    def test_empty_query_lists_everything(self, capsys, catalog):
        code, captured = run(capsys, "--catalog", str(catalog))

        assert code == 0
        assert captured.out.splitlines()[-1] == "3 hymns"

    def test_alpha_sort_and_limit(self, capsys, catalog):
        code, captured = run(capsys, "--catalog", str(catalog), "--sort", "alpha", "--limit", "1")

        assert code == 0
        assert captured.out.splitlines() == ["1. Amazing Grace", "... 2 more", "3 hymns"]

    def test_dataset_selected_by_name(self, capsys, catalog):
        code, captured = run(capsys, "--catalog", str(catalog), "--dataset", "hymnal", "-q", "2")

        assert code == 0
        assert captured.out.splitlines() == ["2. It Is Well", '1 results for "2"']

    def test_catalog_path_from_environment(self, capsys, catalog, monkeypatch):
        monkeypatch.setenv("CATALOG_PATH", str(catalog))

        code, _ = run(capsys, "--query", "river")

        assert code == 0

    def test_default_catalog_in_working_directory(self, capsys, catalog):
        code, captured = run(capsys, "-q", "marvelous")

        assert code == 0
        assert captured.out.splitlines()[0] == "3. Grace Greater than Our Sin"

    def test_missing_catalog_fails(self, capsys, tmp_path):
        code, captured = run(capsys, "--catalog", str(tmp_path / "nope.json"))

        assert code == 1
        assert "Catalog not found" in captured.out

    def test_unknown_dataset_fails(self, capsys, catalog):
        code, captured = run(capsys, "--catalog", str(catalog), "--dataset", "carols")

        assert code == 1
        assert "Unknown dataset 'carols'" in captured.out

    def test_invalid_settings_fail(self, capsys, catalog, monkeypatch):
        monkeypatch.setenv("RESULT_LIMIT", "0")

        code, captured = run(capsys, "--catalog", str(catalog))

        assert code == 1
        assert "Invalid settings" in captured.err


@pytest.mark.unit
class TestFormatting:
    """Listing lines and summaries."""

    def test_format_line_fills_missing_fields(self):
        assert format_line(Document(id="x", number="12", title="Holy")) == "12. Holy"
        assert format_line(Document(id="x")) == "-. (Untitled)"

    @pytest.mark.parametrize(
        ("count", "query", "expected"),
        [(3, "grace", '3 results for "grace"'), (1, "", "1 hymn"), (0, "", "0 hymns")],
    )
    def test_format_summary(self, count, query, expected):
        assert format_summary(count, query) == expected

    def test_sort_choices(self):
        args = build_argument_parser().parse_args(["--sort", "number"])

        assert args.sort == "number"
        with pytest.raises(SystemExit):
            build_argument_parser().parse_args(["--sort", "random"])
