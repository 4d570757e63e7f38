from typing import List, Optional, Tuple

from spendwise.contracts.document import (
    BulletRow,
    KeyValueRow,
    ParsedDocument,
    ProseRow,
    Row,
    Section,
    Translation,
)
from spendwise.core.analysis import grammar


class SectionParser:
    """
    Parses raw generator output back into sections and rows.

    Rules:
    - the first ``--- TRANSLATION`` splits primary text from the translation part
    - blocks are separated by whitespace-only lines
    - the first line of a block is its title, blocks with an empty title are dropped
    - body lines are bullets, key/value pairs or prose, in that priority

    Pure and deterministic. Never raises on malformed input.
    """

    def parse(self, output: str) -> ParsedDocument:
        primary_text, translation_text = self.split_translation(output or "")

        primary = self._parse_sections(primary_text)

        translation = None
        if translation_text is not None:
            label, sections = self._parse_translation(translation_text)
            translation = Translation(language_label=label, sections=sections)

        return ParsedDocument(primary=primary, translation=translation)

    # --- step 1: translation split ---

    @staticmethod
    def split_translation(output: str) -> Tuple[str, Optional[str]]:
        index = output.find(grammar.TRANSLATION_DELIMITER)
        if index == -1:
            return output, None
        return output[:index], output[index:]

    # --- step 2: blocks ---

    @staticmethod
    def split_blocks(text: str) -> List[List[str]]:
        blocks: List[List[str]] = []
        current: List[str] = []

        # lines end at "\n" only; other Unicode separators stay inside the line
        for line in text.split("\n"):
            line = line.removesuffix("\r")
            if grammar.BLANK_LINE_RE.match(line):
                if current:
                    blocks.append(current)
                    current = []
                continue
            current.append(line)

        if current:
            blocks.append(current)

        return blocks

    # --- step 3: sections ---

    def _parse_sections(self, text: str) -> List[Section]:
        sections = []
        for block in self.split_blocks(text):
            section = self._parse_block(block)
            if section is not None:
                sections.append(section)
        return sections

    def _parse_block(self, lines: List[str]) -> Optional[Section]:
        title = lines[0]
        if not title.strip():
            return None
        return Section(title=title, rows=[self.classify_line(line) for line in lines[1:]])

    def _parse_translation(self, text: str) -> Tuple[str, List[Section]]:
        label = grammar.DEFAULT_TRANSLATION_LABEL
        sections = []

        for index, block in enumerate(self.split_blocks(text)):
            title = block[0]
            # only the opening block can be the header; a repeated delimiter
            # further down is ordinary content
            if index == 0 and grammar.HEADER_MARKER in title:
                label = self.translation_label(title)
                continue
            section = self._parse_block(block)
            if section is not None:
                sections.append(section)

        return label, sections

    @staticmethod
    def translation_label(header_line: str) -> str:
        match = grammar.TRANSLATION_HEADER_RE.match(header_line)
        if match and match.group("language") and match.group("language").strip():
            return match.group("language").strip()

        before_marker = header_line.split(grammar.HEADER_MARKER, 1)[0].strip()
        return before_marker or grammar.DEFAULT_TRANSLATION_LABEL

    # --- step 4: rows ---

    @staticmethod
    def classify_line(line: str) -> Row:
        stripped = line.strip()

        if stripped.startswith(grammar.BULLET_MARKER):
            return BulletRow(text=stripped[len(grammar.BULLET_MARKER):].strip())

        if grammar.KEY_VALUE_SEPARATOR in line:
            key, *rest = line.split(grammar.KEY_VALUE_SEPARATOR)
            return KeyValueRow(
                key=key.strip(),
                value=grammar.KEY_VALUE_SEPARATOR.join(rest).strip(),
            )

        return ProseRow(text=stripped)


_default_parser = SectionParser()


def parse(output: str) -> ParsedDocument:
    return _default_parser.parse(output)
