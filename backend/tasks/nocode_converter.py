from __future__ import annotations
"""
Figma → No-code-schema (ButtonGroup-block under en syntetiserad Body-Stack).

Flöde:
- Varje rot-entry i `Result.nodes` (eller rå `nodes`) besöks exakt en gång.
- detect_button_group avgör om noden är en knappgrupp (namn ELLER struktur).
- Träff → ett ButtonGroup-block med appearance/content från nocode_mappers.
- Efter genomgången: root-Stack under "root_id" som pekar på alla block.

Publikt API:
    convert_figma_to_nocode(figma_json, id_generator=None) -> NoCodeDocument
    detect_button_group(node) -> bool
    main(argv) -> int   (CLI)
"""

import json
import logging
import os
import random
import string
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from .nocode_mappers import (
    extract_button_properties,
    map_button_group_appearance,
    visible_button_instances,
)
from .nocode_schemas import (
    ROOT_ID,
    BlockAdditional,
    ButtonGroupComponent,
    ButtonGroupContent,
    ButtonGroupOptions,
    NoCodeBlock,
    NoCodeDocument,
    StackComponent,
    StackContent,
)

log = logging.getLogger("figma-nocode/converter")

# ────────────────────────────────────────────────────────────────────────────
# Konfiguration via env
# ────────────────────────────────────────────────────────────────────────────

DEFAULT_OUTPUT_PATH = os.getenv("NOCODE_OUTPUT_PATH", "./no-code-output.json")
ID_LENGTH = int(os.getenv("NOCODE_ID_LENGTH", "6") or "6")
ID_PREFIX = os.getenv("NOCODE_ID_PREFIX", "b_")
DETERMINISTIC_IDS = os.getenv("NOCODE_DETERMINISTIC_IDS", "0").lower() in ("1", "true", "yes")
MAX_ID_ATTEMPTS = int(os.getenv("NOCODE_MAX_ID_ATTEMPTS", "1000") or "1000")

_MINLOG = os.getenv("NOCODE_MINLOG", "0").lower() in ("1", "true", "yes")

def _minlog(evt: str, **kv):
    if _MINLOG:
        try:
            log.info("[nocode] %s %s", evt, json.dumps(kv, ensure_ascii=False, default=str))
        except (TypeError, ValueError):
            log.info("[nocode] %s %s", evt, kv)

# ────────────────────────────────────────────────────────────────────────────
# Mönsterdetektor
# ────────────────────────────────────────────────────────────────────────────

BUTTON_GROUP_KEYWORDS = ("button group", "buttons", "btn-group", "buttongroup")

def detect_button_group(node: Dict[str, Any]) -> bool:
    name = str(node.get("name") or "").lower()
    if any(kw in name for kw in BUTTON_GROUP_KEYWORDS):
        return True

    children = node.get("children")
    buttons = [
        ch for ch in (children if isinstance(children, list) else [])
        if isinstance(ch, dict)
        and ch.get("type") == "INSTANCE"
        and "button" in str(ch.get("name") or "").lower()
    ]
    # layoutMode jämförs exakt, inte lower-cased
    return len(buttons) >= 2 and node.get("layoutMode") == "HORIZONTAL"

# ────────────────────────────────────────────────────────────────────────────
# Id-generatorer (injicerbara)
# ────────────────────────────────────────────────────────────────────────────

IdGenerator = Callable[[], str]

_ID_ALPHABET = string.ascii_lowercase + string.digits


class RandomIdGenerator:
    """Slumpade id:n, t.ex. "b_k3x9qa". Egen Random-instans → seedbar i tester."""

    def __init__(self, length: int = ID_LENGTH, prefix: str = ID_PREFIX,
                 rng: Optional[random.Random] = None) -> None:
        self.length = max(1, length)
        self.prefix = prefix
        self._rng = rng or random.Random()

    def __call__(self) -> str:
        return self.prefix + "".join(self._rng.choices(_ID_ALPHABET, k=self.length))


class SequentialIdGenerator:
    """Deterministiska id:n: b_1, b_2, …"""

    def __init__(self, prefix: str = ID_PREFIX, start: int = 1) -> None:
        self.prefix = prefix
        self._next = start

    def __call__(self) -> str:
        out = f"{self.prefix}{self._next}"
        self._next += 1
        return out


def default_id_generator() -> IdGenerator:
    return SequentialIdGenerator() if DETERMINISTIC_IDS else RandomIdGenerator()

def _fresh_id(id_generator: IdGenerator, blocks: Dict[str, NoCodeBlock]) -> str:
    # root_id och redan använda nycklar får aldrig återanvändas
    for _ in range(MAX_ID_ATTEMPTS):
        block_id = str(id_generator())
        if block_id != ROOT_ID and block_id not in blocks:
            return block_id
    raise ValueError(
        f"Id-generatorn gav inget unikt block-id på {MAX_ID_ATTEMPTS} försök "
        f"({len(blocks)} block redan upptagna)."
    )

# ────────────────────────────────────────────────────────────────────────────
# Block-assembler
# ────────────────────────────────────────────────────────────────────────────

def map_button_group_content(node: Dict[str, Any]) -> ButtonGroupContent:
    buttons = visible_button_instances(node)
    return ButtonGroupContent(
        mode="manual",
        options=ButtonGroupOptions(
            data=[extract_button_properties(btn, i) for i, btn in enumerate(buttons, 1)]
        ),
        type="default",
    )

def build_button_group_block(node: Dict[str, Any], block_id: str) -> NoCodeBlock:
    return NoCodeBlock(
        component=ButtonGroupComponent(
            appearance=map_button_group_appearance(node),
            content=map_button_group_content(node),
        ),
        displayName=str(node.get("name") or ""),
        id=block_id,
        parentId=ROOT_ID,
    )

def build_root_block(child_ids: List[str]) -> NoCodeBlock:
    return NoCodeBlock(
        component=StackComponent(content=StackContent(blockIds=list(child_ids))),
        displayName="Body",
        additional=BlockAdditional(isRootBlock=True),
        id=ROOT_ID,
    )

def add_button_group(blocks: Dict[str, NoCodeBlock], node: Dict[str, Any],
                     id_generator: IdGenerator) -> str:
    """Bygger ButtonGroup-blocket för `node` och lägger in det i ackumulatorn."""
    block_id = _fresh_id(id_generator, blocks)
    block = build_button_group_block(node, block_id)
    blocks[block_id] = block
    _minlog("block.button_group", id=block_id, name=block.displayName,
            buttons=len(block.component.content.options.data))
    return block_id

def synthesize_root(blocks: Dict[str, NoCodeBlock]) -> NoCodeBlock:
    """Root-Stack sist, med alla övriga block-nycklar i insättningsordning."""
    root = build_root_block([k for k in blocks if k != ROOT_ID])
    blocks[ROOT_ID] = root
    return root

# ────────────────────────────────────────────────────────────────────────────
# Publikt API
# ────────────────────────────────────────────────────────────────────────────

def _root_nodes(figma_json: Dict[str, Any]) -> Dict[str, Any]:
    result = figma_json.get("Result") if isinstance(figma_json, dict) else None
    nodes = (result or {}).get("nodes") if isinstance(result, dict) else None
    if nodes is None and isinstance(figma_json, dict):
        nodes = figma_json.get("nodes")
    if not isinstance(nodes, dict):
        raise ValueError("Hittade varken 'Result.nodes' eller 'nodes' i Figma-payloaden.")
    return nodes

def convert_figma_to_nocode(figma_json: Dict[str, Any], *,
                            id_generator: Optional[IdGenerator] = None) -> NoCodeDocument:
    """Konverterar en Figma nodes-payload till ett NoCodeDocument. Indata muteras inte."""
    gen = id_generator or default_id_generator()
    nodes = _root_nodes(figma_json)
    _minlog("convert.start", entries=len(nodes))

    blocks: Dict[str, NoCodeBlock] = {}
    for key, entry in nodes.items():
        node = entry.get("document") if isinstance(entry, dict) else None
        if not isinstance(node, dict):
            raise ValueError(f"Nod '{key}' saknar 'document'.")
        if detect_button_group(node):
            add_button_group(blocks, node, gen)

    synthesize_root(blocks)
    log.debug("Konverterade %d nod(er) → %d knappgrupp(er)", len(nodes), len(blocks) - 1)
    _minlog("convert.done", blocks=list(blocks))
    return NoCodeDocument(blocks=blocks)

# ────────────────────────────────────────────────────────────────────────────
# CLI
# ────────────────────────────────────────────────────────────────────────────

USAGE = "Usage: figma-nocode <figma-json-file> [output-file]"

def log_level(default: int = logging.INFO) -> int:
    """LOG_LEVEL som loggnivå; okända namn ger default."""
    level = getattr(logging, os.getenv("LOG_LEVEL", "INFO").strip().upper(), None)
    return level if isinstance(level, int) else default

def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=log_level())
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print(USAGE, file=sys.stderr)
        return 1

    in_path = Path(args[0])
    out_path = Path(args[1] if len(args) > 1 else DEFAULT_OUTPUT_PATH)
    try:
        payload = json.loads(in_path.read_text(encoding="utf-8"))
        doc = convert_figma_to_nocode(payload)
        out_path.write_text(
            json.dumps(doc.to_json_dict(), ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
    except (OSError, ValueError) as e:
        # json.JSONDecodeError är en ValueError
        print(f"Conversion failed: {e}", file=sys.stderr)
        return 1

    print(f"Successfully converted Button Groups to {out_path}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())


__all__ = [
    "BUTTON_GROUP_KEYWORDS",
    "RandomIdGenerator",
    "SequentialIdGenerator",
    "detect_button_group",
    "map_button_group_content",
    "convert_figma_to_nocode",
    "main",
]
