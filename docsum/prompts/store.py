"""
Persistent storage for user-authored prompt templates.

User templates live in a single JSON file. System templates are merged in on
read and can never be edited or deleted through the store.
"""

import json
import logging
import uuid
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from ..exceptions import StorageError, TemplateError
from .templates import SYSTEM_TEMPLATES, PromptTemplate


logger = logging.getLogger(__name__)


class TemplateStore:
    """JSON-file backed store of user templates, merged with the system templates."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _load_user_templates(self) -> list[PromptTemplate]:
        if not self.path.exists():
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Failed to read templates from {self.path}: {e}") from e

        return [PromptTemplate.from_dict(item) for item in data]

    def _write_user_templates(self, templates: list[PromptTemplate]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump([t.to_dict() for t in templates], f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise StorageError(f"Failed to write templates to {self.path}: {e}") from e

    def list_templates(self) -> list[PromptTemplate]:
        """System templates followed by user templates in creation order."""
        return list(SYSTEM_TEMPLATES.values()) + self._load_user_templates()

    def list_user_templates(self) -> list[PromptTemplate]:
        return self._load_user_templates()

    def as_mapping(self) -> dict[str, PromptTemplate]:
        """Template registry keyed by id; a user template never shadows a system one."""
        mapping = dict(SYSTEM_TEMPLATES)
        for template in self._load_user_templates():
            if template.id in mapping:
                logger.warning(f"Ignoring user template '{template.id}' that clashes with a system template")
                continue
            mapping[template.id] = template
        return mapping

    def get(self, template_id: str) -> Optional[PromptTemplate]:
        return self.as_mapping().get(template_id)

    def save_user_template(self, template: PromptTemplate) -> PromptTemplate:
        """
        Create or update a user template.

        A template with an empty id gets a generated one. Updating keeps the
        original ``created_at`` and refreshes ``updated_at``.

        Raises:
            TemplateError: If the template targets a system template
        """
        if template.is_system_template or self._is_system_key(template):
            raise TemplateError(f"System template '{template.id or template.name}' cannot be edited")

        templates = self._load_user_templates()
        now = datetime.now()

        for index, existing in enumerate(templates):
            if existing.id == template.id:
                updated = replace(
                    template,
                    is_system_template=False,
                    created_at=existing.created_at or now,
                    updated_at=now,
                )
                templates[index] = updated
                self._write_user_templates(templates)
                logger.info(f"Updated user template '{updated.id}'")
                return updated

        created = replace(
            template,
            id=template.id or uuid.uuid4().hex,
            is_system_template=False,
            created_at=now,
            updated_at=now,
        )
        templates.append(created)
        self._write_user_templates(templates)
        logger.info(f"Created user template '{created.id}' ({created.name})")
        return created

    def delete_user_template(self, template_id: str) -> None:
        """
        Delete a user template.

        Raises:
            TemplateError: If the id names a system template or no template at all
        """
        if template_id in SYSTEM_TEMPLATES:
            raise TemplateError(f"System template '{template_id}' cannot be deleted")

        templates = self._load_user_templates()
        remaining = [t for t in templates if t.id != template_id]
        if len(remaining) == len(templates):
            raise TemplateError(f"Template not found: {template_id}")

        self._write_user_templates(remaining)
        logger.info(f"Deleted user template '{template_id}'")

    @staticmethod
    def _is_system_key(template: PromptTemplate) -> bool:
        system_names = {t.name.lower() for t in SYSTEM_TEMPLATES.values()}
        return template.id in SYSTEM_TEMPLATES or template.name.lower() in system_names
