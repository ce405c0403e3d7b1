#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
XLIFF 本地化工具 - 命令行入口

子命令：
- update: 用最新的源字符串（JSONL）同步 .xlf 文件
- sort: 按 id 规范排序 trans-unit
- translations: 导出 id -> 译文 映射（JSON）
- untranslated: 列出尚未翻译的 id
- status: 按状态统计 trans-unit 数量

用法:
    xliff-tools <command> [options]
    xliff-tools <command> --help
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from . import __version__
from .core import SourceNode, XlfDocument, load_document, save_document
from .utils.config import ConfigManager, XliffConfig
from .utils.errors import ConfigurationError, SourceNodeError, XliffToolsError
from .utils.io import iter_jsonl_objects, write_text_file
from .utils.logger import ToolLogger, setup_logger
from .utils.ui import BilingualMessage, show_state_table


def load_source_nodes(path: Path) -> list[SourceNode]:
    """读取 JSONL 源字符串：每行 {"id": ..., "source": ..., "note": ...}"""
    nodes = []
    for line_no, obj in iter_jsonl_objects(path):
        try:
            nodes.append(SourceNode.from_dict(obj))
        except SourceNodeError as e:
            raise SourceNodeError(f"{path.name}:{line_no}: {e.message}", line_no=line_no) from e
    return nodes


def cmd_update(args: argparse.Namespace, config: XliffConfig, log: ToolLogger) -> int:
    source_path = Path(args.source)
    xlf_path = Path(args.xlf)
    document_id = args.id or source_path.name

    nodes = load_source_nodes(source_path)
    log.debug(f"Read {len(nodes)} source strings from {source_path}")

    created = not xlf_path.exists()
    if created:
        if not args.target_language:
            raise ConfigurationError(
                f"--target-language is required to create {xlf_path}",
                config_key="target_language",
            )
        doc = XlfDocument()
        doc.load_new(args.target_language, source_language=config.source_language, datatype=config.datatype)
    else:
        doc = load_document(xlf_path)

    with log.timer(f"Updating {xlf_path.name}"):
        changed = doc.update(nodes, document_id)

    # 频繁排序会产生很大的 diff，默认只在新建时排序
    if args.sort or (created and config.sort_new_documents):
        changed = doc.sort() or changed

    if changed:
        save_document(doc, xlf_path)
        BilingualMessage.success(f"已更新 {xlf_path}", f"Updated {xlf_path}")
    else:
        BilingualMessage.info(f"{xlf_path} 无需更新", f"{xlf_path} is up to date")
    return 0


def cmd_sort(args: argparse.Namespace, config: XliffConfig, log: ToolLogger) -> int:
    xlf_path = Path(args.xlf)
    doc = load_document(xlf_path)
    if doc.sort():
        save_document(doc, xlf_path)
        BilingualMessage.success(f"已排序 {xlf_path}", f"Sorted {xlf_path}")
    else:
        BilingualMessage.info(f"{xlf_path} 已是有序的", f"{xlf_path} is already sorted")
    return 0


def cmd_translations(args: argparse.Namespace, config: XliffConfig, log: ToolLogger) -> int:
    doc = load_document(Path(args.xlf))
    text = json.dumps(doc.get_translations(), indent=2, ensure_ascii=False) + "\n"
    if args.out:
        write_text_file(args.out, text)
        log.info(f"Wrote translations to {args.out}")
    else:
        sys.stdout.write(text)
    return 0


def cmd_untranslated(args: argparse.Namespace, config: XliffConfig, log: ToolLogger) -> int:
    doc = load_document(Path(args.xlf))
    for unit_id in sorted(doc.get_untranslated_resource_ids()):
        print(unit_id)
    return 0


def cmd_status(args: argparse.Namespace, config: XliffConfig, log: ToolLogger) -> int:
    xlf_path = Path(args.xlf)
    doc = load_document(xlf_path)
    show_state_table(xlf_path.name, doc.document.state_counts())
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xliff-tools",
        description="XLIFF 本地化工具 - keep .xlf translation files in sync with source strings",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
示例:
  xliff-tools update strings.jsonl xlf/strings.de.xlf --target-language de
  xliff-tools untranslated xlf/strings.de.xlf
  xliff-tools translations xlf/strings.de.xlf -o build/strings.de.json
        """,
    )
    parser.add_argument("--version", action="version", version=f"xliff-tools {__version__}")
    parser.add_argument("--config", help="配置文件路径（默认 ./xliff-tools.json）")
    parser.add_argument("-v", "--verbose", action="store_true", help="输出调试日志")

    sub = parser.add_subparsers(dest="command")

    p = sub.add_parser("update", help="用源字符串同步 .xlf 文件")
    p.add_argument("source", help="源字符串 JSONL（id, source, note）")
    p.add_argument("xlf", help="要更新（或新建）的 .xlf 文件")
    p.add_argument("--target-language", help="新建文档时的目标语言")
    p.add_argument("--id", help="源文档标识（写入 original 属性，默认取 JSONL 文件名）")
    p.add_argument("--sort", action="store_true", help="更新后按 id 重新排序")
    p.set_defaults(func=cmd_update)

    p = sub.add_parser("sort", help="按 id 排序 trans-unit")
    p.add_argument("xlf")
    p.set_defaults(func=cmd_sort)

    p = sub.add_parser("translations", help="导出 id -> 译文 JSON")
    p.add_argument("xlf")
    p.add_argument("-o", "--out", help="输出文件（默认 stdout）")
    p.set_defaults(func=cmd_translations)

    p = sub.add_parser("untranslated", help="列出未翻译的 id")
    p.add_argument("xlf")
    p.set_defaults(func=cmd_untranslated)

    p = sub.add_parser("status", help="按状态统计")
    p.add_argument("xlf")
    p.set_defaults(func=cmd_status)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """主入口函数"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    log = setup_logger("DEBUG" if args.verbose else "INFO")
    try:
        config = ConfigManager(Path(args.config) if args.config else None).config
        log = setup_logger(
            "DEBUG" if args.verbose else config.log_level,
            log_file=Path(config.log_file) if config.log_file else None,
        )
        return args.func(args, config, log)
    except XliffToolsError as e:
        log.error(str(e))
        return 1
    except FileNotFoundError as e:
        log.error(f"File not found: {e.filename}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
