"""
Tests for process_catalog.engine — the in-memory process engine.
"""

import pytest

from process_catalog.engine import (
    InMemoryProcessEngine,
    ProcessDefinition,
    ProcessEngine,
    ProcessHandle,
    load_definition,
)


class TestInMemoryProcessEngine:
    def test_satisfies_the_engine_protocol(self, engine):
        assert isinstance(engine, ProcessEngine)
        assert isinstance(engine.process_by_id("orders"), ProcessHandle)

    def test_ids_follow_registration_order(self, engine):
        assert engine.process_ids() == ["orders", "shipping"]
        assert engine.count == 2

    def test_redeploy_replaces_in_place(self, engine):
        engine.register(ProcessDefinition(id="orders", name="Orders v2"))
        assert engine.process_ids() == ["orders", "shipping"]
        assert engine.process_by_id("orders").name == "Orders v2"

    def test_unregister(self, engine):
        engine.unregister("orders")
        engine.unregister("never-registered")
        assert engine.process_ids() == ["shipping"]

    def test_unknown_id_raises_key_error(self, engine):
        with pytest.raises(KeyError):
            engine.process_by_id("missing")

    def test_listing_is_a_snapshot(self, engine):
        ids = engine.process_ids()
        engine.register(ProcessDefinition(id="billing", name="Billing"))
        assert ids == ["orders", "shipping"]


class TestDiscovery:
    def test_from_directory_loads_yaml_definitions(self, tmp_path):
        (tmp_path / "orders.yaml").write_text(
            "id: orders\nname: Order Process\nmetadata:\n  Description: Handles orders\n"
        )
        (tmp_path / "shipping.yml").write_text("id: shipping\nname: Shipping Process\n")

        engine = InMemoryProcessEngine.from_directory(tmp_path)

        assert engine.process_ids() == ["orders", "shipping"]
        assert engine.process_by_id("orders").meta_data == {"Description": "Handles orders"}
        assert engine.process_by_id("shipping").meta_data == {}

    def test_skips_private_hidden_and_foreign_files(self, tmp_path):
        (tmp_path / "_draft.yaml").write_text("id: draft\nname: Draft\n")
        (tmp_path / ".hidden.yaml").write_text("id: hidden\nname: Hidden\n")
        (tmp_path / "notes.txt").write_text("id: notes\nname: Notes\n")
        (tmp_path / "real.yaml").write_text("id: real\nname: Real\n")

        assert InMemoryProcessEngine().discover(tmp_path) == ["real"]

    def test_broken_files_are_skipped(self, tmp_path):
        (tmp_path / "a_bad_yaml.yaml").write_text("id: [unclosed\n")
        (tmp_path / "b_no_name.yaml").write_text("id: nameless\n")
        (tmp_path / "c_list.yaml").write_text("- id: x\n")
        (tmp_path / "d_good.yaml").write_text("id: good\nname: Good\n")

        engine = InMemoryProcessEngine()
        assert engine.discover(tmp_path) == ["good"]
        assert engine.process_ids() == ["good"]

    def test_duplicate_ids_keep_the_later_file_and_list_once(self, tmp_path):
        (tmp_path / "a_orders.yaml").write_text("id: orders\nname: Orders v1\n")
        (tmp_path / "b_orders.yaml").write_text("id: orders\nname: Orders v2\n")
        (tmp_path / "c_shipping.yaml").write_text("id: shipping\nname: Shipping\n")

        engine = InMemoryProcessEngine()
        assert engine.discover(tmp_path) == ["orders", "shipping"]
        assert engine.process_by_id("orders").name == "Orders v2"
        assert engine.count == 2

    def test_missing_directory_yields_empty_engine(self, tmp_path):
        engine = InMemoryProcessEngine.from_directory(tmp_path / "nope")
        assert engine.count == 0


class TestLoadDefinition:
    def test_metadata_keys_become_strings(self, tmp_path):
        path = tmp_path / "p.yaml"
        path.write_text("id: p\nname: P\nmetadata:\n  1: one\n")
        assert load_definition(path).meta_data == {"1": "one"}

    def test_metadata_must_be_a_mapping(self, tmp_path):
        path = tmp_path / "p.yaml"
        path.write_text("id: p\nname: P\nmetadata: [a, b]\n")
        with pytest.raises(ValueError, match="'metadata' must be a mapping"):
            load_definition(path)

    def test_id_must_be_a_string(self, tmp_path):
        path = tmp_path / "p.yaml"
        path.write_text("id: 12\nname: P\n")
        with pytest.raises(ValueError, match="'id' must be a non-empty string"):
            load_definition(path)
