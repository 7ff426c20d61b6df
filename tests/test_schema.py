import copy
import unittest

from helios.data.schema import Field, Schema, SchemaMigrator, build_document_schema


class SchemaMigratorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.schema = build_document_schema("/data", "http://auth.example")
        self.migrator = SchemaMigrator(self.schema)
        self.default = self.schema.build_default()

    def test_adds_exactly_missing_fields(self) -> None:
        loaded = copy.deepcopy(self.default)
        del loaded["settings"]["game"]["fullscreen"]
        del loaded["newsCache"]
        loaded["settings"]["game"]["resWidth"] = 800
        expected = copy.deepcopy(loaded)
        expected["settings"]["game"]["fullscreen"] = False
        expected["newsCache"] = {"date": None, "content": None, "dismissed": False}

        result = self.migrator.reconcile(self.default, loaded)
        self.assertEqual(result, expected)

    def test_keeps_unknown_fields(self) -> None:
        loaded = {"settings": {"game": {"shaders": "on"}}, "futureFlag": True}
        result = self.migrator.reconcile(self.default, loaded)
        self.assertEqual(result["futureFlag"], True)
        self.assertEqual(result["settings"]["game"]["shaders"], "on")
        self.assertEqual(result["settings"]["game"]["resHeight"], 720)

    def test_present_values_are_not_overwritten(self) -> None:
        loaded = {"modConfigurations": [{"id": "srv"}], "clientToken": "tok", "settings": "broken"}
        result = self.migrator.reconcile(self.default, loaded)
        self.assertEqual(result["modConfigurations"], [{"id": "srv"}])
        self.assertEqual(result["clientToken"], "tok")
        self.assertEqual(result["settings"], "broken")

    def test_opaque_subtrees_are_preserved(self) -> None:
        accounts = {"abc": {"id": "abc", "type": "custom", "skin": {"model": "slim"}}}
        java = {"srv": {"minRAM": "1G", "extra": [1, 2]}}
        loaded = {"accounts": copy.deepcopy(accounts), "javaConfig": copy.deepcopy(java)}
        result = self.migrator.reconcile(self.default, loaded)
        self.assertEqual(result["accounts"], accounts)
        self.assertEqual(result["javaConfig"], java)

    def test_opaque_marker_stops_recursion(self) -> None:
        schema = Schema(
            {
                "blob": Field({"a": 1}, opaque=True),
                "obj": Field(Schema.from_defaults({"a": 1})),
            }
        )
        migrator = SchemaMigrator(schema)
        result = migrator.reconcile(schema.build_default(), {"blob": {"b": 2}, "obj": {"b": 2}})
        self.assertEqual(result["blob"], {"b": 2})
        self.assertEqual(result["obj"], {"a": 1, "b": 2})

    def test_missing_fields_get_independent_copies(self) -> None:
        first = self.migrator.reconcile(self.default, {})
        first["accounts"]["x"] = {}
        self.assertEqual(self.default["accounts"], {})
        self.assertEqual(self.schema.build_default()["accounts"], {})

    def test_auth_api_patch(self) -> None:
        document = {"settings": {"launcher": {"authAPI": ""}}}
        applied = self.migrator.apply_patches(document, self.default)
        self.assertEqual(applied, ["auth_api_endpoint"])
        self.assertEqual(document["settings"]["launcher"]["authAPI"], "http://auth.example")

    def test_auth_api_patch_keeps_custom_endpoint(self) -> None:
        document = {"settings": {"launcher": {"authAPI": "https://mine.example"}}}
        self.assertEqual(self.migrator.apply_patches(document, self.default), [])
        self.assertEqual(document["settings"]["launcher"]["authAPI"], "https://mine.example")

    def test_auth_api_patch_ignores_malformed_settings(self) -> None:
        document = {"settings": "broken"}
        self.assertEqual(self.migrator.apply_patches(document, self.default), [])
        self.assertEqual(document, {"settings": "broken"})


if __name__ == "__main__":
    unittest.main()
