# File: serp_scout/parser/sitemap_parser.py
"""serp_scout.parser.sitemap_parser: разбор sitemap.xml и sitemap index."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from lxml import etree

from serp_scout.logger import logger


@dataclass(slots=True)
class SitemapDocument:
    """Содержимое sitemap: адреса из <loc>, даты из <lastmod> и тип корня."""

    locs: List[str] = field(default_factory=list)
    lastmods: List[str] = field(default_factory=list)
    root_tag: str = ""

    @property
    def is_index(self) -> bool:
        return self.root_tag == "sitemapindex"


def parse_sitemap(xml_content: str) -> SitemapDocument:
    """Разбирает XML sitemap и возвращает :class:`SitemapDocument`.

    Парсер lxml работает в режиме ``recover``, поэтому частично битый XML
    всё равно даёт найденные <loc>. Полностью нечитаемый ввод даёт пустой
    документ.

    Пример:
    ```python
    from serp_scout.parser.sitemap_parser import parse_sitemap

    with open('sitemap.xml', encoding='utf-8') as f:
        doc = parse_sitemap(f.read())
    print(len(doc.locs), doc.is_index)
    ```
    """
    parser = etree.XMLParser(ns_clean=True, recover=True, resolve_entities=False)
    try:
        root = etree.fromstring(xml_content.strip().encode("utf-8"), parser=parser)
    except etree.XMLSyntaxError as exc:
        logger.debug("Sitemap is not parseable XML: %s", exc)
        return SitemapDocument()
    if root is None:
        return SitemapDocument()

    ns = etree.QName(root).namespace
    locs = _entry_texts(root, ns, "loc")
    lastmods = _entry_texts(root, ns, "lastmod")
    root_tag = etree.QName(root).localname.lower()
    logger.debug("Sitemap <%s>: %d loc, %d lastmod", root_tag, len(locs), len(lastmods))
    return SitemapDocument(locs=locs, lastmods=lastmods, root_tag=root_tag)


def _entry_texts(root: etree._Element, ns: Optional[str], name: str) -> List[str]:
    """Тексты <name> прямо внутри <url>/<sitemap> в пространстве имён корня.

    Вложенные расширения (<image:loc>, <video:loc>) сюда не попадают.
    """
    prefix = f"{{{ns}}}" if ns else ""
    texts: List[str] = []
    for entry in ("url", "sitemap"):
        for node in root.iterfind(f"{prefix}{entry}/{prefix}{name}"):
            if node.text and node.text.strip():
                texts.append(node.text.strip())
    return texts
