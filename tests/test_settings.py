import asyncio
import unittest
from pathlib import Path
from tempfile import TemporaryDirectory

import yaml
from pydantic import ValidationError

from auto_insert_folder.data_models import VaultMetadata
from auto_insert_folder.settings import (
    InsertSettings,
    SettingsStore,
    merge_settings,
    settings_store_for,
)


class MergeSettingsTests(unittest.TestCase):
    def test_none_yields_defaults(self) -> None:
        settings = merge_settings(None)
        self.assertEqual(settings.insert_position, "top")
        self.assertEqual(settings.format, "Folder: {{folder}}")
        self.assertEqual(settings.allowed_folders, [])
        self.assertTrue(settings.enable_for_all_folders)
        self.assertEqual(settings.insert_mode, "body")
        self.assertEqual(settings.frontmatter_property, "folder")
        self.assertEqual(settings.frontmatter_format, "{{folder}}")

    def test_partial_record_overlays_defaults(self) -> None:
        settings = merge_settings({"insert_mode": "both", "frontmatter_property": "location"})
        self.assertEqual(settings.insert_mode, "both")
        self.assertEqual(settings.frontmatter_property, "location")
        self.assertEqual(settings.format, "Folder: {{folder}}")
        self.assertEqual(settings.insert_position, "top")

    def test_plugin_camel_case_keys_are_accepted(self) -> None:
        settings = merge_settings(
            {
                "insertPosition": "bottom",
                "allowedFolders": ["Work", "Personal"],
                "enableForAllFolders": False,
                "frontmatterFormat": "[[{{folder}}]]",
            }
        )
        self.assertEqual(settings.insert_position, "bottom")
        self.assertEqual(settings.allowed_folders, ["Work", "Personal"])
        self.assertFalse(settings.enable_for_all_folders)
        self.assertEqual(settings.frontmatter_format, "[[{{folder}}]]")

    def test_invalid_field_falls_back_to_default(self) -> None:
        with self.assertLogs("auto_insert_folder.settings", level="WARNING"):
            settings = merge_settings({"insert_position": "middle", "format": "X {{folder}}"})
        self.assertEqual(settings.insert_position, "top")
        self.assertEqual(settings.format, "X {{folder}}")

    def test_unknown_keys_pass_through(self) -> None:
        settings = merge_settings({"futureOption": 3})
        self.assertEqual(settings.model_dump()["futureOption"], 3)
        self.assertNotIn("futureOption", settings.as_payload())

    def test_non_mapping_yields_defaults(self) -> None:
        with self.assertLogs("auto_insert_folder.settings", level="WARNING"):
            settings = merge_settings(["not", "a", "mapping"])  # type: ignore[arg-type]
        self.assertEqual(settings, InsertSettings())

    def test_allowed_folders_text_area_form(self) -> None:
        settings = merge_settings({"allowed_folders": "Projects\n  Work/Notes \n\nPersonal"})
        self.assertEqual(settings.allowed_folders, ["Projects", "Work/Notes", "Personal"])

    def test_header_mode_is_a_synonym_for_frontmatter(self) -> None:
        self.assertEqual(merge_settings({"insertMode": "header"}).insert_mode, "frontmatter")


class SettingsStoreTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmpdir = TemporaryDirectory()
        self.path = Path(self.tmpdir.name) / "config" / "settings.yaml"
        self.store = SettingsStore(self.path)

    def tearDown(self) -> None:
        self.tmpdir.cleanup()

    def test_missing_file_loads_defaults(self) -> None:
        self.assertIsNone(self.store.load_persisted())
        self.assertEqual(self.store.load(), InsertSettings())

    def test_update_persists_changes(self) -> None:
        self.store.update(insert_mode="frontmatter", allowed_folders=["Work"])
        saved = yaml.safe_load(self.path.read_text(encoding="utf-8"))
        self.assertEqual(saved["insert_mode"], "frontmatter")
        self.assertEqual(saved["allowed_folders"], ["Work"])

        reloaded = SettingsStore(self.path).load()
        self.assertEqual(reloaded.insert_mode, "frontmatter")
        self.assertEqual(reloaded.allowed_folders, ["Work"])

    def test_update_is_visible_through_live_settings(self) -> None:
        self.store.update(format="In {{folder}}")
        self.assertEqual(self.store.settings.format, "In {{folder}}")

    def test_invalid_update_is_not_saved(self) -> None:
        with self.assertRaises(ValidationError):
            self.store.update(insert_position="sideways")
        self.assertFalse(self.path.exists())
        self.assertEqual(self.store.settings.insert_position, "top")

    def test_unknown_setting_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            self.store.update(colour="blue")

    def test_unknown_persisted_keys_survive_save(self) -> None:
        self.path.parent.mkdir(parents=True)
        self.path.write_text("futureOption: kept\ninsertPosition: bottom\n", encoding="utf-8")
        self.store.load()
        self.store.update(format="{{folder}}")
        saved = yaml.safe_load(self.path.read_text(encoding="utf-8"))
        self.assertEqual(saved["futureOption"], "kept")
        self.assertEqual(saved["insert_position"], "bottom")

    def test_invalid_yaml_raises(self) -> None:
        self.path.parent.mkdir(parents=True)
        self.path.write_text("insert_mode: [body\n", encoding="utf-8")
        with self.assertRaises(ValueError):
            self.store.load()

    def test_current_loads_persisted_settings(self) -> None:
        self.path.parent.mkdir(parents=True)
        self.path.write_text("insertPosition: bottom\n", encoding="utf-8")
        settings = asyncio.run(self.store.current())
        self.assertEqual(settings.insert_position, "bottom")
        self.assertIs(asyncio.run(self.store.current()), settings)

    def test_update_async_persists_and_replaces_live_settings(self) -> None:
        settings = asyncio.run(self.store.update_async(insert_mode="both", format="In {{folder}}"))
        self.assertEqual(settings.insert_mode, "both")
        self.assertIs(self.store.settings, settings)
        saved = yaml.safe_load(self.path.read_text(encoding="utf-8"))
        self.assertEqual(saved["format"], "In {{folder}}")

    def test_invalid_update_async_is_not_saved(self) -> None:
        with self.assertRaises(ValidationError):
            asyncio.run(self.store.update_async(insert_mode="sideways"))
        with self.assertRaises(ValueError):
            asyncio.run(self.store.update_async(colour="blue"))
        self.assertFalse(self.path.exists())
        self.assertEqual(self.store.settings.insert_mode, "body")

    def test_store_is_shared_per_vault(self) -> None:
        vault = VaultMetadata(
            name="settings-test",
            path=Path(self.tmpdir.name),
            description="",
            exists=True,
            settings_path=self.path,
        )
        self.assertIs(settings_store_for(vault), settings_store_for(vault))


if __name__ == "__main__":
    unittest.main()
