"""Raw project descriptor (``.vcxproj``) reader.

The automation object model does not expose every property reliably; the
SDL check in particular is only readable from the descriptor text. This
module parses that text once and answers the few condition-keyed queries
the extractor needs. Namespaces are stripped so that queries can use bare
element names.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import List, Optional

from slncmake.errors import DescriptorParseError

logger = logging.getLogger("slncmake.provider.descriptor")


def configuration_condition(configuration: str, platform: str) -> str:
    """Return the MSBuild condition string selecting one configuration.

    Args:
        configuration: Project configuration name (e.g. ``Debug``).
        platform: Platform name (e.g. ``x64``).

    Returns:
        str: ``'$(Configuration)|$(Platform)'=='Debug|x64'``.
    """
    return f"'$(Configuration)|$(Platform)'=='{configuration}|{platform}'"


def _local_name(tag: str) -> str:
    if "}" in tag:
        return tag.rsplit("}", 1)[1]
    return tag


def _normalize_condition(condition: str) -> str:
    # MSBuild tolerates whitespace around the comparison operator.
    return "".join(condition.split())


def _normalize_include(path: str) -> str:
    return path.replace("\\", "/").lower()


def _parse_bool(text: Optional[str]) -> bool:
    return (text or "").strip().lower() == "true"


class RawDescriptor:
    """Queryable view of a raw project descriptor."""

    def __init__(self, root: Optional[ET.Element], source: str = "") -> None:
        self._root = root
        self.source = source
        if root is not None:
            for element in root.iter():
                element.tag = _local_name(element.tag)

    @classmethod
    def from_text(
        cls, text: str, source: str = "", target: Optional[str] = None
    ) -> "RawDescriptor":
        """Parse descriptor text.

        Args:
            text: XML text of the descriptor.
            source: Where the text came from, for diagnostics.
            target: Owning target name, attached to parse errors.

        Raises:
            DescriptorParseError: If the text is not well-formed XML.
        """
        try:
            root = ET.fromstring(text)
        except ET.ParseError as exc:
            raise DescriptorParseError(
                f"Failed to load {source or 'project descriptor'}: {exc}",
                target=target,
            ) from exc
        logger.debug("Parsed raw descriptor %s", source or "<inline>")
        return cls(root, source)

    @classmethod
    def empty(cls) -> "RawDescriptor":
        """Descriptor without any node; every query yields unset."""
        return cls(None)

    def _children(self, parent: ET.Element, name: str) -> List[ET.Element]:
        return [child for child in parent if child.tag == name]

    def project_sdl_check(self, configuration: str, platform: str) -> Optional[bool]:
        """SDL check of the project for one configuration.

        Mirrors ``//ItemDefinitionGroup[@Condition=...]/ClCompile/SDLCheck``.
        Returns None unless exactly one node matches.
        """
        if self._root is None:
            return None

        condition = _normalize_condition(configuration_condition(configuration, platform))
        nodes: List[ET.Element] = []
        for group in self._root.iter("ItemDefinitionGroup"):
            if _normalize_condition(group.get("Condition", "")) != condition:
                continue
            for compile_node in self._children(group, "ClCompile"):
                nodes.extend(self._children(compile_node, "SDLCheck"))

        if len(nodes) != 1:
            return None
        return _parse_bool(nodes[0].text)

    def file_sdl_check(
        self, include: str, configuration: str, platform: str
    ) -> Optional[bool]:
        """SDL check override of one source file.

        Mirrors ``/Project/ItemGroup/ClCompile[@Include=path]/SDLCheck[@Condition=...]``.
        The include path is compared case-insensitively with normalized
        separators.
        """
        if self._root is None:
            return None

        condition = _normalize_condition(configuration_condition(configuration, platform))
        wanted = _normalize_include(include)
        nodes: List[ET.Element] = []
        for group in self._children(self._root, "ItemGroup"):
            for compile_node in self._children(group, "ClCompile"):
                if _normalize_include(compile_node.get("Include", "")) != wanted:
                    continue
                for node in self._children(compile_node, "SDLCheck"):
                    if _normalize_condition(node.get("Condition", "")) == condition:
                        nodes.append(node)

        if len(nodes) != 1:
            return None
        return _parse_bool(nodes[0].text)


__all__ = ["RawDescriptor", "configuration_condition"]
