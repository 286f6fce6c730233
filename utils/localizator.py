import json
from pathlib import Path
from typing import Optional

import config
from enums.text_entity import TextEntity


class Localizator:
    l10n_dir = Path(__file__).resolve().parent.parent / "l10n"

    _SECTIONS = {
        TextEntity.BASKET: "basket",
        TextEntity.ORDER: "order",
        TextEntity.COMMON: "common",
    }

    @staticmethod
    def get_text(entity: TextEntity, key: str, lang: Optional[str] = None) -> str:
        """
        Get localized text for given entity and key.

        Args:
            entity: Text section (BASKET, ORDER, COMMON)
            key: Localization key
            lang: Optional language code (e.g., "de", "en").
                  If None, uses config.LANGUAGE (default).
                  Pass it explicitly when several buyers with different
                  languages share one process.

        Returns:
            Localized text string

        Example:
            text = Localizator.get_text(TextEntity.BASKET, "error_empty_basket", lang="de")
        """
        # Use provided lang or fall back to global config
        language = lang if lang is not None else config.LANGUAGE
        localization_file = Localizator.l10n_dir / f"{language}.json"

        with open(localization_file, "r", encoding="UTF-8") as f:
            data = json.loads(f.read())
            return data[Localizator._SECTIONS[entity]][key]
