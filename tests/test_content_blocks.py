"""Tests for content block validation."""

import pytest

from blogapi.errors import ContentBlockError, ValidationError
from blogapi.schemas.content_blocks import DEFAULT_IMAGE_ALT
from blogapi.services.content_blocks import validate_content_blocks


class TestStructure:
    """Shape checks applied before per-block rules."""

    def test_rejects_non_list(self):
        with pytest.raises(ValidationError) as exc:
            validate_content_blocks({'type': 'paragraph'})
        assert 'array' in exc.value.message

    def test_rejects_non_object_item(self):
        with pytest.raises(ContentBlockError) as exc:
            validate_content_blocks([{'type': 'paragraph', 'content': 'x', 'order': 0}, 'oops'])
        assert exc.value.position == 2

    @pytest.mark.parametrize('order', [None, '1', True, float('nan'), float('inf'), float('-inf')])
    def test_order_must_be_numeric(self, order):
        block = {'type': 'paragraph', 'content': 'x'}
        if order is not None:
            block['order'] = order
        with pytest.raises(ContentBlockError) as exc:
            validate_content_blocks([block])
        assert 'order' in exc.value.message

    def test_empty_list_is_valid(self):
        assert validate_content_blocks([]) == []


class TestOrdering:
    """Blocks come back sorted by order."""

    def test_sorted_by_order(self):
        result = validate_content_blocks([
            {'type': 'paragraph', 'content': 'second', 'order': 2},
            {'type': 'title', 'content': 'first', 'order': 1},
        ])
        assert [b['content'] for b in result] == ['first', 'second']

    def test_ties_keep_input_order(self):
        result = validate_content_blocks([
            {'type': 'paragraph', 'content': 'a', 'order': 1},
            {'type': 'paragraph', 'content': 'b', 'order': 1},
            {'type': 'paragraph', 'content': 'c', 'order': 0},
        ])
        assert [b['content'] for b in result] == ['c', 'a', 'b']

    def test_input_not_mutated(self):
        blocks = [
            {'type': 'paragraph', 'content': 'b', 'order': 2},
            {'type': 'paragraph', 'content': 'a', 'order': 1},
        ]
        validate_content_blocks(blocks)
        assert blocks[0]['content'] == 'b'
        assert 'id' not in blocks[0]

    def test_error_position_is_counted_in_sorted_order(self):
        with pytest.raises(ContentBlockError) as exc:
            validate_content_blocks([
                {'type': 'paragraph', 'content': 'ok', 'order': 5},
                {'type': 'paragraph', 'content': '', 'order': 1},
            ])
        assert exc.value.position == 1
        assert exc.value.message.startswith('Block 1:')


class TestBlockRules:
    """Per-block validation."""

    def test_type_required(self):
        with pytest.raises(ContentBlockError) as exc:
            validate_content_blocks([{'content': 'x', 'order': 0}])
        assert 'type' in exc.value.reason

    def test_unknown_type(self):
        with pytest.raises(ContentBlockError) as exc:
            validate_content_blocks([{'type': 'video', 'content': 'x', 'order': 0}])
        assert 'video' in exc.value.reason

    @pytest.mark.parametrize('content', ['', '   ', None])
    def test_content_required(self, content):
        with pytest.raises(ContentBlockError):
            validate_content_blocks([{'type': 'paragraph', 'content': content, 'order': 0}])

    def test_generates_unique_ids_when_missing(self):
        result = validate_content_blocks([
            {'type': 'paragraph', 'content': 'a', 'order': 0},
            {'type': 'paragraph', 'content': 'b', 'order': 1},
        ])
        ids = [b['id'] for b in result]
        assert all(i.startswith('block_') for i in ids)
        assert len(set(ids)) == 2

    def test_keeps_existing_id(self):
        result = validate_content_blocks([{'id': 'intro', 'type': 'paragraph', 'content': 'a', 'order': 0}])
        assert result[0]['id'] == 'intro'

    @pytest.mark.parametrize('block_type', ['title', 'subtitle'])
    @pytest.mark.parametrize('level', [0, 7])
    def test_heading_level_out_of_range(self, block_type, level):
        with pytest.raises(ContentBlockError) as exc:
            validate_content_blocks([
                {'type': block_type, 'content': 'Heading', 'order': 0, 'metadata': {'level': level}}
            ])
        assert 'level' in exc.value.reason

    def test_heading_level_in_range(self):
        result = validate_content_blocks([
            {'type': 'subtitle', 'content': 'Heading', 'order': 0, 'metadata': {'level': 3}}
        ])
        assert result[0]['metadata']['level'] == 3

    def test_image_alt_defaults(self):
        result = validate_content_blocks([{'type': 'image', 'content': 'x', 'order': 0}])
        assert result[0]['metadata']['imageAlt'] == DEFAULT_IMAGE_ALT

    def test_image_alt_kept_when_given(self):
        result = validate_content_blocks([
            {'type': 'image', 'content': 'x', 'order': 0,
             'metadata': {'imageAlt': 'A chart', 'imageCaption': 'Figure 1'}}
        ])
        assert result[0]['metadata'] == {'imageAlt': 'A chart', 'imageCaption': 'Figure 1'}

    def test_list_type_rejected(self):
        with pytest.raises(ContentBlockError) as exc:
            validate_content_blocks([
                {'type': 'list', 'content': 'a\nb', 'order': 0, 'metadata': {'listType': 'numbered'}}
            ])
        assert 'listType' in exc.value.reason

    def test_list_type_defaults_to_unordered(self):
        result = validate_content_blocks([{'type': 'list', 'content': 'a\nb', 'order': 0}])
        assert result[0]['metadata']['listType'] == 'unordered'

    def test_quote_author_and_extra_metadata_kept(self):
        result = validate_content_blocks([
            {'type': 'quote', 'content': 'Be brief.', 'order': 0,
             'metadata': {'quoteAuthor': 'Someone', 'alignment': 'center', 'highlight': True}}
        ])
        assert result[0]['metadata'] == {'quoteAuthor': 'Someone', 'alignment': 'center', 'highlight': True}

    def test_alignment_rejected(self):
        with pytest.raises(ContentBlockError):
            validate_content_blocks([
                {'type': 'paragraph', 'content': 'x', 'order': 0, 'metadata': {'alignment': 'justify'}}
            ])
