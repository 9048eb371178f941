"""End-to-end tests for the click CLI against a temporary data directory."""

import re

import pytest
from click.testing import CliRunner

from agromarket.infrastructure.cli.main import cli


@pytest.fixture
def run(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("RESEND_API_KEY", raising=False)
    env = {"AGROMARKET_DATA_DIR": str(tmp_path / "data"), "AGROMARKET_LOG_LEVEL": "ERROR"}
    runner = CliRunner()

    def _run(*args):
        return runner.invoke(cli, list(args), env=env)

    return _run


def _product_id(output: str) -> str:
    return re.search(r"Product (\S+)", output).group(1)


def _order_id(output: str) -> str:
    return re.search(r"Order (\S+) placed", output).group(1)


class TestCatalogueCommands:

    def test_add_and_list(self, run):
        assert run("farmer", "register", "--id", "f1", "--name", "Granja Sur").exit_code == 0
        added = run("product", "add", "--farmer", "f1", "--name", "Tomatoes", "--stock", "150")

        assert added.exit_code == 0, added.output
        assert "Availability: High" in added.output
        assert "Seller:       Granja Sur" in added.output

        listed = run("product", "list")
        assert "Tomatoes" in listed.output

    def test_update_forbidden(self, run):
        product_id = _product_id(run("product", "add", "--farmer", "f1", "--name", "Kale").output)

        result = run("product", "update", "--id", product_id, "--farmer", "f2", "--stock", "1")

        assert result.exit_code == 1
        assert "not allowed" in result.output


class TestOrderCommands:

    def test_place_then_cancel(self, run):
        product_id = _product_id(
            run("product", "add", "--farmer", "f1", "--name", "Raspberries", "--stock", "100").output
        )

        placed = run(
            "order", "place", "--items", f"{product_id}:20", "--slot", "friday-am",
            "--name", "Ana", "--user", "u1",
        )
        assert placed.exit_code == 0, placed.output
        order_id = _order_id(placed.output)

        cancelled = run(
            "order", "transition", "--id", order_id, "--status", "cancelled",
            "--reason", "out of season",
        )
        assert cancelled.exit_code == 0, cancelled.output
        assert "is now cancelled" in cancelled.output

        shown = run("order", "show", "--id", order_id)
        assert "out of season" in shown.output

        assert "1 unviewed" in run("order", "cancellations", "--user", "u1").output

        deleted = run("order", "delete", "--id", order_id, "--user", "u1")
        assert deleted.exit_code == 0
        assert "No orders found." in run("order", "list").output

    def test_insufficient_stock(self, run):
        product_id = _product_id(
            run("product", "add", "--farmer", "f1", "--name", "Lettuce", "--stock", "5").output
        )

        result = run("order", "place", "--items", f"{product_id}:10", "--slot", "tuesday-am")

        assert result.exit_code == 1
        assert "5 available, 10 requested" in result.output

    def test_bad_items_format(self, run):
        result = run("order", "place", "--items", "nocolon", "--slot", "tuesday-am")

        assert result.exit_code == 2
        assert "Expected 'ProductId:Quantity'" in result.output


class TestPointCommands:

    def test_add_without_geocoding(self, run):
        result = run(
            "point", "add", "--farmer", "f1", "--name", "Plaza", "--address", "Plaza de Armas",
            "--zone", "Centro", "--no-geocode",
        )

        assert result.exit_code == 0, result.output
        assert "Coords:  -" in result.output
        assert "Plaza" in run("point", "list", "--zone", "Centro").output


class TestConfiguration:

    def test_bad_setting_is_reported(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = CliRunner().invoke(
            cli, ["farmer", "list"], env={"AGROMARKET_STORE_TIMEOUT": "never"}
        )

        assert result.exit_code == 1
        assert "AGROMARKET_STORE_TIMEOUT" in result.output
