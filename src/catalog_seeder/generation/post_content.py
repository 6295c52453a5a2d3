from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from catalog_seeder.generation.content import RandomContentProvider

DEFAULT_MIN_PARAGRAPHS = 1
DEFAULT_MAX_PARAGRAPHS = 5
IMAGE_CHANCE = 33


class BodyGenerator(Protocol):
    def generate_body(
        self,
        image_ids: Sequence[int],
        min_paragraphs: int = DEFAULT_MIN_PARAGRAPHS,
        max_paragraphs: int = DEFAULT_MAX_PARAGRAPHS,
    ) -> str: ...


def _paragraph_block(text: str) -> str:
    return f"<!-- wp:paragraph -->\n<p>{text}</p>\n<!-- /wp:paragraph -->"


def _image_block(image_id: int) -> str:
    return (
        f'<!-- wp:image {{"id":{image_id}}} -->\n'
        f'<figure class="wp-block-image"><img class="wp-image-{image_id}"/></figure>\n'
        "<!-- /wp:image -->"
    )


class ContentGenerator:
    """Builds block-formatted body text, optionally illustrated with known images."""

    def __init__(self, content: RandomContentProvider) -> None:
        self.content = content

    def generate_body(
        self,
        image_ids: Sequence[int],
        min_paragraphs: int = DEFAULT_MIN_PARAGRAPHS,
        max_paragraphs: int = DEFAULT_MAX_PARAGRAPHS,
    ) -> str:
        if min_paragraphs < 0 or max_paragraphs < min_paragraphs:
            raise ValueError(
                f"Invalid paragraph range [{min_paragraphs}, {max_paragraphs}]",
            )
        count = self.content.number_between(min_paragraphs, max_paragraphs)
        blocks: list[str] = []
        for _ in range(count):
            blocks.append(_paragraph_block(self.content.paragraph()))
            if image_ids and self.content.boolean(IMAGE_CHANCE):
                blocks.append(_image_block(self.content.random_element(image_ids)))
        return "\n\n".join(blocks)
