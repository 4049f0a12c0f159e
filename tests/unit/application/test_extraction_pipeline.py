"""
Unit-тесты для ExtractionPipeline и фабрики компонентов.
"""

import json

import pytest

from contracts.raw_document_dto import RawDocument
from freight_parsing.application.dispatcher import VendorDispatcher
from freight_parsing.application.extraction_pipeline import ExtractionPipeline, PipelineResult
from freight_parsing.application.factory import ExtractionComponentFactory
from freight_parsing.domain.exceptions import UnrecognizedFormatError

from conftest import TRANSALLIANCE_DOCUMENT, ZIEGLER_DOCUMENT


@pytest.fixture
def pipeline(transalliance_adapter, ziegler_adapter):
    return ExtractionPipeline(VendorDispatcher([transalliance_adapter, ziegler_adapter]))


def test_process_counts_lines(pipeline):
    result = pipeline.process(TRANSALLIANCE_DOCUMENT, "ORDER.PDF")

    assert isinstance(result, PipelineResult)
    assert result.vendor == "transalliance"
    assert result.raw_line_count == len(TRANSALLIANCE_DOCUMENT)
    assert result.normalized_line_count == len([line for line in TRANSALLIANCE_DOCUMENT if line.strip()])
    assert result.processing_time_ms >= 0
    assert result.order.attachment_filenames == ["order.pdf"]


def test_process_document(pipeline):
    document = RawDocument.from_text("\n".join(ZIEGLER_DOCUMENT), attachment_filename="Booking.PDF")
    result = pipeline.process_document(document)

    assert result.vendor == "ziegler"
    assert result.order.attachment_filenames == ["Booking.PDF"]


def test_result_to_dict_is_json(pipeline):
    payload = pipeline.process(ZIEGLER_DOCUMENT).to_dict()

    assert payload["vendor"] == "ziegler"
    assert payload["order"]["order_reference"] == "ZR123456"
    json.dumps(payload)


def test_unrecognized(pipeline):
    with pytest.raises(UnrecognizedFormatError):
        pipeline.process(["Invoice", "Total 12.00"])


def test_factory_pipeline(fixed_today):
    pipeline = ExtractionComponentFactory.create_pipeline(today=fixed_today)

    assert [adapter.name for adapter in pipeline.dispatcher.adapters] == ["transalliance", "ziegler"]
    assert pipeline.process(ZIEGLER_DOCUMENT).vendor == "ziegler"


def test_factory_shares_country_resolver():
    resolver = ExtractionComponentFactory.create_country_resolver()
    adapters = ExtractionComponentFactory.create_adapters(country_resolver=resolver)

    assert all(adapter.toolkit.address_parser.country_resolver is resolver for adapter in adapters)
