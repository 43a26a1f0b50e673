"""Property-based tests for the bucket client over generated paths and contents."""

import asyncio
from typing import List

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from bucketfs.core.errors import LogicError
from bucketfs.core.models import Content, Path

from conftest import FakeS3Transport, collect, make_bucket, names

segments = st.text(
    alphabet=st.characters(blacklist_categories=("Cs", "Cc"), blacklist_characters="/"),
    min_size=1,
    max_size=12,
)
segment_lists = st.lists(segments, min_size=1, max_size=4)


@settings(max_examples=50, deadline=None)
@given(parts=segment_lists, body=st.binary(max_size=256))
def test_round_trip(parts: List[str], body: bytes):
    async def scenario():
        transport = FakeS3Transport()
        bucket = make_bucket(transport)
        path = Path(tuple(parts), False)
        parent = Path(tuple(parts[:-1]), True)

        assert await bucket.get(path) is None

        assert (await bucket.upload(path, Content.of_bytes(body))).is_success
        content = await bucket.get(path)
        assert content is not None
        assert await content.read() == body
        assert await bucket.contains(path)
        assert await names(bucket.list(parent)) == {parts[-1]}

        assert (await bucket.delete(path)).is_success
        assert await bucket.get(path) is None
        assert not await bucket.contains(path)
        assert await collect(bucket.list(parent)) == []

    asyncio.run(scenario())


@settings(max_examples=50, deadline=None)
@given(parts=segment_lists)
def test_get_on_a_directory_path_is_rejected(parts: List[str]):
    async def scenario():
        transport = FakeS3Transport()
        bucket = make_bucket(transport)

        with pytest.raises(LogicError):
            await bucket.get(Path(tuple(parts), True))
        with pytest.raises(LogicError):
            await bucket.upload(Path(tuple(parts), True), Content.none())

        assert transport.requests == []

    asyncio.run(scenario())


@settings(max_examples=50, deadline=None)
@given(parts=segment_lists)
def test_list_on_a_file_path_is_rejected(parts: List[str]):
    transport = FakeS3Transport()
    bucket = make_bucket(transport)

    with pytest.raises(LogicError):
        bucket.list(Path(tuple(parts), False))

    assert transport.requests == []
