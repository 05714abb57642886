"""Tests for the entities tables are built from."""

import pytest

from ddlschema_core import (
    Column,
    Datatype,
    ForeignKey,
    IndexColumn,
    MutationResult,
    PrimaryKey,
    ReferentialAction,
    Rejection,
    TableOptions,
    UniqueKey,
    extract_constraints,
)
from ddlschema_core.ast import DefinitionKind, merged_items, node_list
from ddlschema_core.errors import UnknownDefinitionError
from tests import builders as b


class TestDatatype:
    """Declared data types."""

    def test_declared_attributes_only(self) -> None:
        datatype = Datatype.from_def(b.datatype("DECIMAL", digits=10, decimals=2, unsigned=True))

        assert datatype.to_dict() == {"datatype": "decimal", "digits": 10, "decimals": 2, "unsigned": True}

    def test_enum_values_and_extras(self) -> None:
        datatype = Datatype.from_def(b.datatype("enum", values=["a", "b"], national=True))

        assert datatype.values == ["a", "b"]
        assert datatype.to_dict() == {"datatype": "enum", "values": ["a", "b"], "national": True}

    def test_missing_type_name(self) -> None:
        with pytest.raises(ValueError):
            Datatype.from_def({"id": "O_DATATYPE", "def": {"length": 3}})

    def test_clone_is_independent(self) -> None:
        datatype = Datatype.from_def(b.datatype("set", values=["x"]))
        copy = datatype.clone()
        copy.values.append("y")

        assert datatype.values == ["x"]


class TestColumn:
    """Column parsing and inline declarations."""

    def test_options_and_inline_declarations(self) -> None:
        column = Column.from_def(
            b.column("id", "bigint", {"unsigned": True}, nullable=False, autoincrement=True,
                     primary=True, unique=True, comment="key", onUpdate="now")["def"]["column"]
        )

        assert column.is_autoincrement
        assert column.inline.primary and column.inline.unique
        assert column.to_dict() == {
            "name": "id",
            "type": {"datatype": "bigint", "unsigned": True},
            "options": {"nullable": False, "autoincrement": True, "comment": "key", "onUpdate": "now"},
        }

    def test_unknown_option_is_ignored(self) -> None:
        column = Column.from_def(b.column("a", sparkle=True)["def"]["column"])

        assert "options" not in column.to_dict()

    def test_extract_does_not_modify_column(self) -> None:
        ref = {"table": "users", "columns": [{"column": "id"}]}
        column = Column.from_def(b.column("user_id", primary=True, unique=True, reference=ref)["def"]["column"])

        extracted = extract_constraints(column)

        assert isinstance(extracted.primary_key, PrimaryKey)
        assert isinstance(extracted.unique_key, UniqueKey)
        assert extracted.foreign_key.column_names == ["user_id"]
        assert extracted.foreign_key.reference.table == "users"
        assert extracted.foreign_key.reference is not column.inline.reference
        assert column.inline.primary and column.inline.unique

    def test_extract_nothing(self) -> None:
        extracted = extract_constraints(Column.from_def(b.column("a")["def"]["column"]))

        assert extracted.primary_key is None
        assert extracted.foreign_key is None
        assert extracted.unique_key is None


class TestForeignKey:
    """Foreign key parsing and column removal."""

    def test_referential_actions(self) -> None:
        key = ForeignKey.from_def(
            b.foreign_key(["a"], "t", ["b"], match="FULL", on=[
                {"trigger": "DELETE", "action": "SET NULL"},
                {"trigger": "update", "action": "no_action"},
            ])["def"]["foreignKey"]
        )

        assert key.reference.match == "full"
        assert key.reference.action_for("delete") is ReferentialAction.SET_NULL
        assert key.reference.action_for("update") is ReferentialAction.NO_ACTION

    def test_unknown_action(self) -> None:
        with pytest.raises(ValueError):
            ReferentialAction.parse("explode")

    def test_unknown_trigger(self) -> None:
        with pytest.raises(ValueError):
            ForeignKey.from_def(b.foreign_key(["a"], "t", ["b"], on=[{"trigger": "insert", "action": "cascade"}])["def"]["foreignKey"])

    def test_drop_column_removes_pair(self) -> None:
        key = ForeignKey.from_def(b.foreign_key(["a", "b"], "t", ["x", "y"])["def"]["foreignKey"])

        assert key.drop_column("a") is True
        assert key.column_names == ["b"]
        assert key.reference.column_names == ["y"]
        assert key.drop_column("zz") is False

    def test_column_count(self) -> None:
        key = ForeignKey.from_def(b.foreign_key(["a", "b"], "t", ["x"])["def"]["foreignKey"])

        assert not key.has_matching_column_count()


class TestIndexColumn:
    """Key column references."""

    def test_plain_name(self) -> None:
        assert IndexColumn.from_def("a") == IndexColumn("a")

    def test_key_drop_column(self) -> None:
        key = UniqueKey(columns=[IndexColumn("a"), IndexColumn("b")])

        assert key.drop_column("a") is True
        assert key.drop_column("a") is False
        assert key.column_names == ["b"]


class TestTableOptions:
    """Table-level settings."""

    def test_later_settings_win(self) -> None:
        options = TableOptions.from_def(
            [{"def": {"engine": "MyISAM"}}, {"def": {"engine": "InnoDB", "rowFormat": "DYNAMIC"}}]
        )

        assert options.to_dict() == {"engine": "InnoDB", "rowFormat": "DYNAMIC"}

    def test_unknown_option_is_ignored(self) -> None:
        options = TableOptions.from_def(b.table_options(sparkle="yes"))

        assert options.is_empty()


class TestAst:
    """Tag helpers and results."""

    def test_definition_kind(self) -> None:
        kind, payload = DefinitionKind.of(b.key("uniqueKey", ["a"]))

        assert kind is DefinitionKind.UNIQUE_KEY
        assert payload == {"columns": [{"column": "a"}]}

    def test_empty_fragment_raises(self) -> None:
        with pytest.raises(UnknownDefinitionError):
            DefinitionKind.of({"id": "O_CREATE_TABLE_CREATE_DEFINITION", "def": {}})

    def test_node_list_requires_list(self) -> None:
        assert node_list(None) == []
        with pytest.raises(ValueError):
            node_list({"id": "P_CREATE_TABLE_CREATE_DEFINITIONS", "def": {"column": {}}})

    def test_merged_items(self) -> None:
        assert list(merged_items(b.table_options(engine="InnoDB"))) == [("engine", "InnoDB")]

    def test_mutation_result_truthiness(self) -> None:
        assert MutationResult.ok()
        assert not MutationResult.rejected(Rejection.LAST_COLUMN)
