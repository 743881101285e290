"""
Value cleaning subpackage.

Public API:
  - ValueCleaner   (configurable scalar normaliser)
  - clean          (module-level shortcut using the default rules)
  - cell_to_str    (raw cell -> text conversion)
"""

from groupnorm.cleaning.value_cleaner import ValueCleaner, cell_to_str, clean

__all__ = [
    "ValueCleaner",
    "cell_to_str",
    "clean",
]
