import pytest
from unittest.mock import AsyncMock
from pydantic import BaseModel

from scrapeless.errors import ScrapelessError, JobFailed
from scrapeless.models.crawl import ErrorResponse, ExtractResponse
from scrapeless.services.crawl import ExtractService
from scrapeless.services.crawl.extract import to_json_schema


class Product(BaseModel):
    name: str
    price: float


@pytest.fixture
def extract(sleep_mock):
    service = ExtractService('sk_test', 'https://api.test', sleep=sleep_mock)
    service._request = AsyncMock()
    return service


class TestSchemaConversion:
    """Extraction schemas accept pydantic models or JSON schema dicts"""

    def test_model_class(self):
        """Test that a pydantic model class is converted to its JSON schema"""
        schema = to_json_schema(Product)
        assert schema['type'] == 'object'
        assert set(schema['properties']) == {'name', 'price'}

    def test_dict_passthrough(self):
        """Test that a JSON schema dict is passed through unchanged"""
        schema = {'type': 'object', 'properties': {'title': {'type': 'string'}}}
        assert to_json_schema(schema) is schema

    def test_none(self):
        """Test that no schema stays None"""
        assert to_json_schema(None) is None

    @pytest.mark.parametrize('bad', ['not a schema', 42, Product(name='x', price=1)])
    def test_invalid(self, bad):
        """Test that values that are not schemas raise ScrapelessError 400"""
        with pytest.raises(ScrapelessError) as exc_info:
            to_json_schema(bad)
        assert exc_info.value.status_code == 400


class TestExtractUrls:
    """Submitting and waiting on extraction jobs"""

    @pytest.mark.asyncio
    async def test_request_body(self, extract):
        """Test that extract_urls submits a camel-cased body and returns the extracted data"""
        extract._request.side_effect = [
            {'id': 'e1'},
            {'status': 'completed', 'success': True, 'data': {'name': 'Widget', 'price': 9.5}},
        ]

        result = await extract.extract_urls(
            ['https://shop.test/widget'],
            {'prompt': 'Get the product', 'schema': Product, 'show_sources': True},
        )

        assert isinstance(result, ExtractResponse)
        assert result.data == {'name': 'Widget', 'price': 9.5}
        endpoint, method, body = extract._request.await_args_list[0].args
        assert (endpoint, method) == ('/v1/extract', 'POST')
        assert body['urls'] == ['https://shop.test/widget']
        assert body['prompt'] == 'Get the product'
        assert body['showSources'] is True
        assert body['origin'] == 'api-sdk'
        assert body['schema']['properties']['price']['type'] == 'number'
        assert extract._request.await_args_list[1].args == ('/v1/extract/e1',)

    @pytest.mark.asyncio
    async def test_completed_unsuccessfully(self, extract):
        """Test that a completed extraction with success false raises JobFailed"""
        extract._request.side_effect = [
            {'id': 'e1'},
            {'status': 'completed', 'success': False, 'error': 'no content', 'data': None},
        ]

        with pytest.raises(JobFailed) as exc_info:
            await extract.extract_urls(['https://shop.test'])

        assert 'no content' in str(exc_info.value)
        assert exc_info.value.job_id == 'e1'

    @pytest.mark.asyncio
    async def test_completed_without_success_flag(self, extract):
        """Test that a completed extraction lacking success=true raises JobFailed"""
        extract._request.side_effect = [
            {'id': 'e1'},
            {'status': 'completed', 'data': {'x': 1}},
        ]

        with pytest.raises(JobFailed) as exc_info:
            await extract.extract_urls(['https://shop.test'])

        assert exc_info.value.job_id == 'e1'
        assert exc_info.value.status == 'completed'

    @pytest.mark.asyncio
    async def test_invalid_schema_is_rejected_before_submit(self, extract):
        """Test that an invalid schema fails before any request is sent"""
        with pytest.raises(ScrapelessError) as exc_info:
            await extract.extract_urls(['https://shop.test'], {'schema': 'price'})

        assert exc_info.value.status_code == 400
        extract._request.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_status_read_is_tagged(self, extract):
        """Test that get_extract_status tags upstream failures as ErrorResponse"""
        extract._request.side_effect = [{'success': False, 'error': 'unknown job'}]

        result = await extract.get_extract_status('e1')

        assert isinstance(result, ErrorResponse)
        assert result.job_kind == 'extract'

    @pytest.mark.asyncio
    async def test_async_extract_returns_raw_submission(self, extract):
        """Test that async_extract_urls returns the submission response as is"""
        extract._request.side_effect = [{'success': True, 'id': 'e9'}]

        response = await extract.async_extract_urls(['https://shop.test'])

        assert response == {'success': True, 'id': 'e9'}
