"""Template catalog: curated templates plus user favorites and custom templates."""

import json
import logging
import random
import string
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Union

from ..core.exceptions import TemplateError
from ..core.types import Template, TemplateCategory, UserTemplateData
from ..storage import KeyValueStore, MemoryKeyValueStore
from .builtin import CURATED_TEMPLATES

logger = logging.getLogger(__name__)

FAVORITES_KEY = "favorites"
CUSTOM_TEMPLATES_KEY = "custom-templates"

_ID_ALPHABET = string.ascii_lowercase + string.digits


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class TemplateCatalog:
    """
    Catalog of prompt templates.

    Curated templates are read-only. Favorites and custom templates are
    persisted in a KeyValueStore as JSON blobs.
    """

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        curated: Sequence[Template] = CURATED_TEMPLATES
    ):
        """
        Initialize the catalog.

        Args:
            store: Persistence for favorites and custom templates (in-memory if None)
            curated: Read-only templates to expose alongside custom ones
        """
        self.store = store or MemoryKeyValueStore()
        self._curated = list(curated)
        self._curated_ids = {t.id for t in self._curated}

    # Persistence helpers
    def _load_json(self, key: str, expected: type) -> Any:
        raw = self.store.get(key)
        if not raw:
            return expected()
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Ignoring corrupt catalog data under '%s'", key)
            return expected()
        if not isinstance(data, expected):
            logger.warning("Ignoring malformed catalog data under '%s'", key)
            return expected()
        return data

    def _save_json(self, key: str, data: Any) -> None:
        self.store.set(key, json.dumps(data))

    # Lookup
    def curated_templates(self) -> List[Template]:
        return list(self._curated)

    def all_templates(self) -> List[Template]:
        """Curated templates followed by custom templates."""
        return self.curated_templates() + self.custom_templates()

    def by_category(self, category: Union[str, TemplateCategory]) -> List[Template]:
        category = TemplateCategory(category)
        return [t for t in self.all_templates() if t.category == category]

    def get(self, template_id: str) -> Optional[Template]:
        for template in self.all_templates():
            if template.id == template_id:
                return template
        return None

    def search(self, query: str) -> List[Template]:
        """
        Search templates by name, description, and tags.

        Matching is a case-insensitive substring test. An empty query
        returns every template.
        """
        needle = query.strip().lower()
        if not needle:
            return self.all_templates()

        def matches(template: Template) -> bool:
            return (
                needle in template.name.lower()
                or needle in template.description.lower()
                or any(needle in tag.lower() for tag in template.tags)
            )

        return [t for t in self.all_templates() if matches(t)]

    def is_curated(self, template_id: str) -> bool:
        return template_id in self._curated_ids

    # Favorites
    def favorites(self) -> List[str]:
        return [f for f in self._load_json(FAVORITES_KEY, list) if isinstance(f, str)]

    def add_favorite(self, template_id: str) -> None:
        favorites = self.favorites()
        if template_id not in favorites:
            favorites.append(template_id)
            self._save_json(FAVORITES_KEY, favorites)

    def remove_favorite(self, template_id: str) -> None:
        favorites = self.favorites()
        if template_id in favorites:
            favorites.remove(template_id)
            self._save_json(FAVORITES_KEY, favorites)

    def is_favorite(self, template_id: str) -> bool:
        return template_id in self.favorites()

    def favorite_templates(self) -> List[Template]:
        """Favorite templates that still exist, in favorite order."""
        templates = []
        for template_id in self.favorites():
            template = self.get(template_id)
            if template is not None:
                templates.append(template)
        return templates

    # Custom templates
    def custom_templates(self) -> List[Template]:
        templates = []
        for data in self._load_json(CUSTOM_TEMPLATES_KEY, list):
            try:
                templates.append(Template.from_dict(data))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping unreadable custom template: %s", e)
        return templates

    def _save_custom_list(self, templates: List[Template]) -> None:
        self._save_json(CUSTOM_TEMPLATES_KEY, [t.to_dict() for t in templates])

    def save_custom(self, template: Template) -> Template:
        """
        Save a custom template.

        A template with an existing custom id replaces it and keeps its
        original created_at.

        Args:
            template: Template to save

        Returns:
            The stored template

        Raises:
            TemplateError: If the id belongs to a curated template
        """
        if self.is_curated(template.id):
            raise TemplateError(
                "Cannot overwrite a curated template",
                template_id=template.id
            )

        now = _now()
        templates = self.custom_templates()
        existing = next((t for t in templates if t.id == template.id), None)

        template.is_custom = True
        template.updated_at = now
        if existing is not None:
            template.created_at = existing.created_at or now
            templates = [template if t.id == template.id else t for t in templates]
        else:
            template.created_at = template.created_at or now
            templates.append(template)

        self._save_custom_list(templates)
        logger.debug("Saved custom template %s", template.id)
        return template

    def delete_custom(self, template_id: str) -> bool:
        templates = self.custom_templates()
        remaining = [t for t in templates if t.id != template_id]
        if len(remaining) == len(templates):
            return False
        self._save_custom_list(remaining)
        return True

    @staticmethod
    def generate_template_id() -> str:
        """Generate a unique id of the form custom-<millis>-<9 chars>."""
        suffix = "".join(random.choices(_ID_ALPHABET, k=9))
        return f"custom-{int(time.time() * 1000)}-{suffix}"

    # Backup
    def export_data(self, history: Optional[Dict[str, List[str]]] = None) -> UserTemplateData:
        return UserTemplateData(
            favorites=self.favorites(),
            custom_templates=self.custom_templates(),
            variable_history=dict(history or {}),
        )

    def import_data(self, data: Union[UserTemplateData, Dict[str, Any]]) -> None:
        """
        Import favorites and custom templates.

        With a dict, only the keys present are replaced. Variable history
        is left to the caller's history store.
        """
        if isinstance(data, UserTemplateData):
            data = data.to_dict()

        if "favorites" in data:
            self._save_json(FAVORITES_KEY, list(data["favorites"] or []))

        if "custom_templates" in data:
            templates = []
            for item in data["custom_templates"] or []:
                template = item if isinstance(item, Template) else Template.from_dict(item)
                template.is_custom = True
                templates.append(template)
            self._save_custom_list(templates)
