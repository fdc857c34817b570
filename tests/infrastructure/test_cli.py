"""End-to-end tests for the click command line, run against ``tmp_path``."""

import re

import pytest
from click.testing import CliRunner

from backoffice.domain.model.order import OrderStatus
from backoffice.infrastructure.cli.main import cli
from backoffice.infrastructure.persistence.flat_file_order_repository import (
    FlatFileOrderRepository,
)
from backoffice.infrastructure.persistence.flat_file_product_repository import (
    FlatFileProductRepository,
)
from backoffice.infrastructure.persistence.record_store import FileRecordStore
from tests.fakes import make_product


@pytest.fixture
def data_dir(tmp_path):
    products = FlatFileProductRepository(FileRecordStore(tmp_path))
    products.save(make_product("P1", "Keyboard", price="1000", stock=10, category="pc"))
    products.save(make_product("P2", "Mouse", price="500", stock=1, category="pc"))
    return tmp_path


@pytest.fixture
def run(data_dir):
    runner = CliRunner()

    def invoke(*args: str):
        return runner.invoke(cli, ["--data-dir", str(data_dir), *args], env={})

    return invoke


def _order_id(output: str) -> str:
    return re.search(r"Order (ORD\w+) created", output).group(1)


class TestProductCommands:

    def test_add_and_list(self, run):
        result = run("product", "add", "--name", "Monitor", "--price", "200000", "--stock", "2")
        assert result.exit_code == 0, result.output
        assert "'Monitor' added at 200,000 KRW" in result.output

        listing = run("product", "list")
        assert "Monitor" in listing.output
        assert "Keyboard" in listing.output

    def test_duplicate_add_fails(self, run):
        result = run("product", "add", "--name", "keyboard", "--price", "1")
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_low_stock_listing(self, run):
        result = run("product", "list", "--low")
        assert "Mouse" in result.output
        assert "Keyboard" not in result.output

    def test_restock_and_update(self, run, data_dir):
        assert run("product", "restock", "--id", "P2", "--quantity", "4").exit_code == 0
        assert run("product", "update", "--id", "P2", "--price", "700").exit_code == 0
        product = FlatFileProductRepository(FileRecordStore(data_dir)).get_by_id("P2")
        assert product.stock == 5
        assert str(product.price) == "700 KRW"

    def test_delete(self, run):
        assert run("product", "delete", "--id", "P2").exit_code == 0
        assert "Mouse" not in run("product", "list").output


class TestCartAndCheckout:

    def test_cart_then_checkout(self, run, data_dir):
        assert run("cart", "add", "--user", "u1", "--product", "P1", "--quantity", "2").exit_code == 0
        show = run("cart", "show", "--user", "u1")
        assert "2,000 KRW" in show.output

        result = run("order", "checkout", "--user", "u1", "--address", "Seoul")
        assert result.exit_code == 0, result.output
        assert "status=PENDING" in result.output

        assert "is empty" in run("cart", "show", "--user", "u1").output
        stock = FlatFileProductRepository(FileRecordStore(data_dir)).get_by_id("P1").stock
        assert stock == 8

    def test_add_beyond_stock_fails(self, run):
        result = run("cart", "add", "--user", "u1", "--product", "P2", "--quantity", "2")
        assert result.exit_code == 1
        assert "Insufficient stock" in result.output

    def test_checkout_empty_cart_fails(self, run):
        result = run("order", "checkout", "--user", "u1", "--address", "Seoul")
        assert result.exit_code == 1
        assert "is empty" in result.output


class TestOrderCommands:

    def test_lifecycle(self, run, data_dir):
        created = run("order", "buy", "--user", "u1", "--product", "P1", "--quantity", "3",
                      "--address", "Seoul")
        assert created.exit_code == 0, created.output
        order_id = _order_id(created.output)

        assert run("order", "status", "--id", order_id, "--to", "paid").exit_code == 0
        assert run("order", "status", "--id", order_id, "--to", "SHIPPING").exit_code == 0
        assert run("order", "status", "--id", order_id, "--to", "DELIVERED").exit_code == 0

        order = FlatFileOrderRepository(FileRecordStore(data_dir)).get_by_id(order_id)
        assert order.status == OrderStatus.DELIVERED

        stats = run("order", "stats")
        assert "3,000 KRW" in stats.output

    def test_skipping_status_fails(self, run):
        order_id = _order_id(
            run("order", "buy", "--user", "u1", "--product", "P1", "--address", "Seoul").output
        )
        result = run("order", "status", "--id", order_id, "--to", "DELIVERED")
        assert result.exit_code == 1
        assert "from PENDING to DELIVERED" in result.output

    def test_cancel_by_owner_only(self, run):
        order_id = _order_id(
            run("order", "buy", "--user", "u1", "--product", "P1", "--address", "Seoul").output
        )
        denied = run("order", "cancel", "--id", order_id, "--user", "u2")
        assert denied.exit_code == 1

        assert run("order", "cancel", "--id", order_id, "--user", "u1").exit_code == 0
        shown = run("order", "show", "--id", order_id)
        assert "status=CANCELLED" in shown.output

    def test_list_and_show_unknown(self, run):
        assert "No orders found." in run("order", "list").output
        missing = run("order", "show", "--id", "ORD0")
        assert missing.exit_code == 1
        assert "Order not found" in missing.output


def test_bad_threshold_in_environment(data_dir):
    result = CliRunner().invoke(
        cli,
        ["--data-dir", str(data_dir), "product", "list"],
        env={"BACKOFFICE_LOW_STOCK_THRESHOLD": "lots"},
    )
    assert result.exit_code == 1
    assert "must be an integer" in result.output
