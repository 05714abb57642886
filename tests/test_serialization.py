"""Tests for table serialization and cloning."""

from ddlschema_core import ColumnPosition, Index, IndexColumn, Table
from tests import builders as b


class TestToDict:
    """Nested-mapping output."""

    def test_full_table(self, users) -> None:
        assert users.to_dict() == {
            "name": "users",
            "columns": [
                {"name": "id", "type": {"datatype": "int"}, "options": {"nullable": False, "autoincrement": True}},
                {"name": "email", "type": {"datatype": "varchar", "length": 255}},
                {"name": "name", "type": {"datatype": "varchar", "length": 100}},
            ],
            "primaryKey": {"columns": [{"column": "id"}]},
            "uniqueKeys": [{"columns": [{"column": "email"}]}],
        }

    def test_foreign_keys_and_indexes(self, orders) -> None:
        json = orders.to_dict()

        assert json["foreignKeys"] == [
            {
                "name": "fk_orders_user",
                "columns": [{"column": "user_id"}],
                "reference": {
                    "table": "users",
                    "columns": [{"column": "id"}],
                    "on": [{"trigger": "delete", "action": "cascade"}],
                },
            }
        ]
        assert json["indexes"] == [{"name": "ix_status", "columns": [{"column": "status"}]}]
        assert json["fulltextIndexes"] == [{"name": "ft_note", "columns": [{"column": "note"}]}]

    def test_empty_collections_are_omitted(self) -> None:
        table = Table.from_common_def(b.create_table("t", b.column("a")))

        assert table.to_dict() == {"name": "t", "columns": [{"name": "a", "type": {"datatype": "int"}}]}

    def test_no_foreign_keys_key_without_foreign_keys(self, users) -> None:
        assert "foreignKeys" not in users.to_dict()
        for key in ("indexes", "spatialIndexes", "fulltextIndexes", "options"):
            assert key not in users.to_dict()

    def test_options_and_spatial_indexes(self) -> None:
        table = Table.from_common_def(
            b.create_table(
                "places",
                b.column("geo", "point"),
                b.key("spatialIndex", ["geo"], name="sp_geo"),
                options={"engine": "InnoDB", "comment": "places", "autoincrement": 10},
            )
        )

        json = table.to_dict()

        assert json["spatialIndexes"] == [{"name": "sp_geo", "columns": [{"column": "geo"}]}]
        assert json["options"] == {"engine": "InnoDB", "comment": "places", "autoincrement": 10}

    def test_index_details(self) -> None:
        table = Table.from_common_def(
            b.create_table(
                "t",
                b.column("title", "varchar", {"length": 200}),
                {
                    "id": "O_CREATE_TABLE_CREATE_DEFINITION",
                    "def": {
                        "index": {
                            "name": "ix_title",
                            "indexType": "btree",
                            "columns": [{"column": "title", "length": 20, "sort": "DESC"}],
                            "options": {"comment": "prefix", "visible": False},
                        }
                    },
                },
            )
        )

        assert table.to_dict()["indexes"] == [
            {
                "name": "ix_title",
                "columns": [{"column": "title", "length": 20, "sort": "desc"}],
                "indexType": "btree",
                "options": {"comment": "prefix", "visible": False},
            }
        ]


class TestClone:
    """Deep copies."""

    def test_clone_serializes_identically(self, orders) -> None:
        assert orders.clone().to_dict() == orders.to_dict()

    def test_clone_shares_database(self, database, orders) -> None:
        assert orders.clone().database is database

    def test_mutating_clone_leaves_original(self, orders) -> None:
        before = orders.to_dict()
        copy = orders.clone()

        copy.drop_column(copy.get_column("status"))
        copy.get_column("note").options.comment = "changed"
        copy.push_index(Index(columns=[IndexColumn("id")], name="ix_id"))
        copy.move_column(copy.get_column("id"), ColumnPosition.after_column("note"))

        assert orders.to_dict() == before

    def test_mutating_original_leaves_clone(self, orders) -> None:
        copy = orders.clone()
        before = copy.to_dict()

        orders.drop_column(orders.get_column("user_id"))
        orders.get_index("ix_status").columns.append(IndexColumn("note"))
        orders.drop_primary_key()

        assert copy.to_dict() == before
