#!/usr/bin/env python3
"""
Точка входа для Freight Parsing (текст документа → JSON заказа).

Использование:
    # Разобрать текстовый файл (строки от конвертера PDF→текст)
    python scripts/parse_document.py path/to/document.txt

    # С именем исходного вложения
    python scripts/parse_document.py path/to/document.txt --filename ORDER_123.PDF

    # Сохранить результат и отладочные данные
    python scripts/parse_document.py path/to/document.txt --output result.json --debug
"""

import sys
import argparse
import json
from pathlib import Path

from loguru import logger

# Добавляем корень проекта в путь
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.settings import LOG_LEVEL
from contracts.raw_document_dto import RawDocument
from freight_parsing.application.factory import ExtractionComponentFactory
from freight_parsing.domain.exceptions import UnrecognizedFormatError


def main():
    """Главная функция: файл → пайплайн → JSON."""
    parser = argparse.ArgumentParser(description="Freight order parsing")
    parser.add_argument("path", help="Путь к текстовому файлу документа")
    parser.add_argument("--filename", help="Имя исходного вложения (по умолчанию имя файла)")
    parser.add_argument("--output", help="Куда сохранить JSON (по умолчанию stdout)")
    parser.add_argument("--debug", action="store_true", help="Добавить отладочные данные пайплайна")
    args = parser.parse_args()

    input_path = Path(args.path)
    if not input_path.is_file():
        print(f"[ERROR] Файл не найден: {input_path}", file=sys.stderr)
        sys.exit(2)

    text = input_path.read_text(encoding="utf-8")
    document = RawDocument.from_text(text, attachment_filename=args.filename or input_path.name)

    pipeline = ExtractionComponentFactory.create_default_pipeline()
    try:
        result = pipeline.process_document(document)
    except UnrecognizedFormatError as e:
        logger.error(f"[parse_document] {e}")
        sys.exit(1)

    payload = result.to_dict() if args.debug else result.order.to_dict()
    output = json.dumps(payload, ensure_ascii=False, indent=2)

    if args.output:
        Path(args.output).write_text(output, encoding="utf-8")
        logger.info(f"[parse_document] Сохранено: {args.output}")
    else:
        print(output)


if __name__ == "__main__":
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        level=LOG_LEVEL,
    )

    main()
