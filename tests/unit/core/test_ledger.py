"""Unit tests for the package ledger."""

from pathlib import Path

from nvmctl.core.ledger import NO_PACKAGES_MARKER, PackageLedger, parse, render


class TestRender:
    """Tests for rendering ledger text."""

    def test_blocks(self) -> None:
        """Each version gets a header, a package line, and a blank line."""
        text = render([("18.20.0", ["eslint", "typescript"]), ("20.11.0", [])])

        assert text == (
            "Node Version: 18.20.0\n"
            "eslint, typescript\n"
            "\n"
            "Node Version: 20.11.0\n"
            f"{NO_PACKAGES_MARKER}\n"
            "\n"
        )

    def test_empty(self) -> None:
        """No entries render as an empty file."""
        assert render([]) == ""


class TestParse:
    """Tests for reading ledger text."""

    def test_union_sorted_unique(self) -> None:
        """The union over all versions is deduplicated and sorted."""
        text = (
            "Node Version: 18.20.0\neslint, prettier\n\n"
            "Node Version: 20.11.0\nprettier\n\n"
        )
        assert parse(text) == ["eslint", "prettier"]

    def test_skips_marker_and_npm(self) -> None:
        """The no-packages marker and npm are never packages."""
        text = f"Node Version: 16.20.2\n{NO_PACKAGES_MARKER}\n\nNode Version: 18.20.0\nnpm, yarn\n"
        assert parse(text) == ["yarn"]

    def test_tolerates_spacing(self) -> None:
        """Extra whitespace and empty tokens are ignored."""
        assert parse("Node Version: 18.20.0\n  eslint ,, @vue/cli  \n") == ["@vue/cli", "eslint"]


class TestPackageLedger:
    """Tests for the ledger file."""

    def test_write_then_read(self, tmp_path: Path) -> None:
        """Writing and reading the file gives the package union."""
        ledger = PackageLedger(tmp_path / "sub" / "ledger.txt")

        path = ledger.write([("18.20.0", ["eslint", "prettier"]), ("20.11.0", ["prettier"])])

        assert path.exists()
        assert ledger.exists()
        assert ledger.read() == ["eslint", "prettier"]

    def test_overwrites(self, tmp_path: Path) -> None:
        """Each write replaces the previous content."""
        ledger = PackageLedger(tmp_path / "ledger.txt")
        ledger.write([("18.20.0", ["eslint"])])
        ledger.write([("20.11.0", ["yarn"])])

        assert ledger.read() == ["yarn"]

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing ledger reads as empty."""
        ledger = PackageLedger(tmp_path / "missing.txt")

        assert not ledger.exists()
        assert ledger.read() == []
