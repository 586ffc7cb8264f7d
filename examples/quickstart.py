"""Quickstart example for i18ntree.

This example merges translation fragments from several sources into one
workspace view and resolves dotted keys against it.

Note: Examples print results directly. In an editor integration, a None
result simply means "show nothing".
"""

import json
import logging
import tempfile
from pathlib import Path

from i18ntree import PathFragmentLoader, WorkspaceTranslation, deep_merge

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

# Example 1: Fragments merge into one view
print("=" * 50)
print("Example 1: Merging Fragments")
print("=" * 50)

workspace = WorkspaceTranslation("my-app")
workspace.merge_fragment({"en": {"greeting": {"hello": "Hi"}}}, "locales/en.json")
workspace.merge_fragment({"en": {"greeting": {"bye": "Bye"}}}, "plugins/extra/en.json")

print(workspace.resolve("greeting.hello", "en"))
# Output: Hi
print(workspace.resolve("greeting.bye", "en"))
# Output: Bye

# Example 2: Subtree listings
print("\n" + "=" * 50)
print("Example 2: Keys Ending at a Subtree")
print("=" * 50)

workspace.merge_fragment({"en": {"item": {"one": "1 item", "many": "{n} items"}}}, "items.json")

print(workspace.resolve("item", "en"))
# Output:
# one: 1 item
# many: {n} items

print(workspace.keys_starting_with("en.item"))
# Output: ['en.item.one', 'en.item.many']

# Example 3: Re-parsed sources replace their previous fragment
print("\n" + "=" * 50)
print("Example 3: Replace by Origin")
print("=" * 50)

workspace.merge_fragment({"en": {"greeting": {"hello": "Hello there"}}}, "./locales/en.json")
print(workspace.resolve("greeting.hello", "en"))
# Output: Hello there
print(len(workspace.parts))
# Output: 3

workspace.remove_fragment("plugins/extra/en.json")
print(workspace.resolve("greeting.bye", "en"))
# Output: None

# Example 4: Missing keys never raise
print("\n" + "=" * 50)
print("Example 4: Fail-Soft Lookups")
print("=" * 50)

print(workspace.resolve("does.not.exist", "en"))
# Output: None
print(workspace.resolve("greeting.hello", "fr"))
# Output: None
print(workspace.resolve("", "en"))
# Output: None
print(workspace.fallback_locale())
# Output: en

# Example 5: Loading JSON files
print("\n" + "=" * 50)
print("Example 5: Loading From Disk")
print("=" * 50)

with tempfile.TemporaryDirectory() as tmpdir:
    root = Path(tmpdir)
    (root / "en.json").write_text(json.dumps({"en": {"title": "Settings"}}), encoding="utf-8")
    (root / "de.json").write_text(json.dumps({"de": {"title": "Einstellungen"}}), encoding="utf-8")

    disk_workspace = WorkspaceTranslation(root)
    summary = disk_workspace.load_fragments(
        PathFragmentLoader(root), ["de.json", "en.json", "fr.json"]
    )
    print(summary)
    # Output: LoadSummary(total=3, ok=2, not_found=1, errors=0)
    for result in summary.get_not_found():
        print(f"Missing: {result.source_path}")

    print(disk_workspace.resolve("title", "de"))
    # Output: Einstellungen
    print(disk_workspace.fallback_locale())
    # Output: de

    description = disk_workspace.describe()
    print(description.locale_names)
    # Output: {'de': 'German', 'en': 'English'}

# Example 6: Merging trees directly
print("\n" + "=" * 50)
print("Example 6: deep_merge")
print("=" * 50)

base = {"en": {"menu": {"open": "Open", "save": "Save"}}}
override = {"en": {"menu": {"save": "Save As"}}}
print(deep_merge(base, override))
# Output: {'en': {'menu': {'open': 'Open', 'save': 'Save As'}}}
print(base)
# Output: {'en': {'menu': {'open': 'Open', 'save': 'Save'}}}

print("\n" + "=" * 50)
print("All examples completed successfully!")
print("=" * 50)
