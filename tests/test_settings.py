import tempfile
import unittest

from helios.data import ConfigStore, JavaConfig, NewsCache, SettingsAccessor
from helios.data.models import JAVA8_JVM_OPTIONS, JAVA17_JVM_OPTIONS
from tests.fakes import make_config


class SettingsAccessorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.temp_dir = tempfile.TemporaryDirectory()
        self.store = ConfigStore(make_config(self.temp_dir.name, auth_api="http://auth.example"))
        self.store.load()
        self.settings = SettingsAccessor(self.store)

    def tearDown(self) -> None:
        self.temp_dir.cleanup()

    def test_auth_api(self) -> None:
        self.settings.set_auth_api("  https://mine.example  ")
        self.assertEqual(self.settings.get_auth_api(), "https://mine.example")
        self.assertEqual(self.settings.get_auth_api(default=True), "http://auth.example")

    def test_game_resolution(self) -> None:
        self.settings.set_game_width("1920")
        self.settings.set_game_height(1080)
        self.assertEqual(self.settings.get_game_settings().res_width, 1920)
        self.assertEqual(self.settings.get_game_height(), 1080)
        self.assertEqual(self.settings.get_game_width(default=True), 1280)
        self.assertTrue(self.settings.validate_game_width("800"))
        self.assertFalse(self.settings.validate_game_height("-1"))
        self.assertFalse(self.settings.validate_game_height("wide"))
        with self.assertRaises(ValueError):
            self.settings.set_game_width("wide")

    def test_directories(self) -> None:
        self.settings.set_data_directory("/games")
        self.assertTrue(self.settings.get_common_directory().endswith("common"))
        self.assertTrue(self.settings.get_instance_directory().startswith("/games"))

    def test_news_cache(self) -> None:
        self.settings.set_news_cache(NewsCache(date="2024-01-01", content="hello"))
        self.settings.set_news_cache_dismissed(True)
        cache = self.settings.get_news_cache()
        self.assertEqual(cache.content, "hello")
        self.assertTrue(cache.dismissed)

    def test_mod_configuration_upsert(self) -> None:
        self.settings.set_mod_configuration("srv", {"id": "srv", "mods": {}})
        self.settings.set_mod_configuration("srv", {"id": "srv", "mods": {"a": True}})
        self.settings.set_mod_configuration("other", {"id": "other", "mods": {}})
        self.assertEqual(len(self.settings.get_mod_configurations()), 2)
        self.assertEqual(self.settings.get_mod_configuration("srv")["mods"], {"a": True})
        self.assertIsNone(self.settings.get_mod_configuration("missing"))

    def test_java_config_defaults(self) -> None:
        self.settings.ensure_java_config("legacy", 8)
        self.settings.ensure_java_config("modern", 17, recommended_ram=4096)
        self.assertEqual(self.settings.get_jvm_options("legacy"), JAVA8_JVM_OPTIONS)
        self.assertEqual(self.settings.get_jvm_options("modern"), JAVA17_JVM_OPTIONS)
        self.assertEqual(self.settings.get_min_ram("legacy"), "2G")
        self.assertEqual(self.settings.get_max_ram("modern"), "4096M")

    def test_java_config_is_not_overwritten(self) -> None:
        self.settings.ensure_java_config("srv", 17)
        self.settings.set_max_ram("srv", "6G")
        self.settings.set_java_executable("srv", "/usr/bin/java")
        self.settings.ensure_java_config("srv", 8)
        config = self.settings.get_java_config("srv")
        self.assertIsInstance(config, JavaConfig)
        self.assertEqual(config.max_ram, "6G")
        self.assertEqual(config.executable, "/usr/bin/java")
        self.assertEqual(config.jvm_options, JAVA17_JVM_OPTIONS)

    def test_java_config_unknown_server(self) -> None:
        self.assertIsNone(self.settings.get_min_ram("missing"))
        self.assertIsNone(self.settings.get_java_config("missing"))
        with self.assertRaises(KeyError):
            self.settings.set_min_ram("missing", "1G")

    def test_selected_server_and_client_token(self) -> None:
        self.settings.set_selected_server("srv")
        self.settings.set_client_token("token")
        self.assertEqual(self.settings.get_selected_server(), "srv")
        self.assertIsNone(self.settings.get_selected_server(default=True))
        self.assertEqual(self.settings.get_client_token(), "token")


if __name__ == "__main__":
    unittest.main()
