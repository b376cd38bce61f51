"""Tests for the two-stage try-on pipeline."""

import pytest
from unittest.mock import call

from tryon_studio.errors import InvalidRequest, NoImageReturned, TransportError
from tryon_studio.models import Image, Stage
from tryon_studio.pipeline import TryOnPipeline


class TestPipelinePreconditions:
    """Tests for input checks made before any model call."""

    @pytest.mark.asyncio
    async def test_missing_person_photo(self, fake_client, make_image):
        pipeline = TryOnPipeline(fake_client)

        with pytest.raises(InvalidRequest):
            await pipeline.run(None, [make_image("dress")])

        fake_client.compose.assert_not_called()

    @pytest.mark.asyncio
    async def test_no_garments(self, fake_client, person_image):
        pipeline = TryOnPipeline(fake_client)

        with pytest.raises(InvalidRequest) as exc_info:
            await pipeline.run(person_image, [])

        assert exc_info.value.kind == "invalid_request"
        fake_client.compose.assert_not_called()
        fake_client.enhance.assert_not_called()


class TestPipelineRun:
    """Tests for ordered, sequential processing."""

    @pytest.mark.asyncio
    async def test_results_in_selection_order(self, fake_client, make_image, person_image):
        garments = [make_image("dress"), make_image("jacket"), make_image("skirt")]

        results = await TryOnPipeline(fake_client).run(person_image, garments, "a runway")

        assert [result.garment for result in results] == garments
        assert [result.image.data for result in results] == [
            b"enhanced:composed:" + garment.data for garment in garments
        ]
        assert fake_client.compose.await_args_list == [
            call(person_image, garment, "a runway") for garment in garments
        ]

    @pytest.mark.asyncio
    async def test_stages_interleave_per_item(self, fake_client, make_image, person_image):
        """Each garment is composed then enhanced before the next one starts."""
        order = []
        compose, enhance = fake_client.compose.side_effect, fake_client.enhance.side_effect

        async def tracked_compose(person, garment, background=""):
            order.append(("compose", garment.data))
            return await compose(person, garment, background)

        async def tracked_enhance(image):
            order.append(("enhance", image.data))
            return await enhance(image)

        fake_client.compose.side_effect = tracked_compose
        fake_client.enhance.side_effect = tracked_enhance

        a, b = make_image("a"), make_image("b")
        await TryOnPipeline(fake_client).run(person_image, [a, b])

        assert order == [
            ("compose", a.data),
            ("enhance", b"composed:" + a.data),
            ("compose", b.data),
            ("enhance", b"composed:" + b.data),
        ]

    @pytest.mark.asyncio
    async def test_progress_reported_per_stage(self, fake_client, make_image, person_image):
        updates = []

        await TryOnPipeline(fake_client).run(
            person_image,
            [make_image("a"), make_image("b")],
            on_progress=updates.append,
        )

        assert [(p.index, p.stage) for p in updates] == [
            (1, Stage.COMPOSE),
            (1, Stage.ENHANCE),
            (2, Stage.COMPOSE),
            (2, Stage.ENHANCE),
        ]
        assert updates[0].label == "Generating try-on for item 1 of 2..."
        assert updates[1].label == "Enhancing quality for item 1..."


class TestPipelineFailures:
    """Tests for fail-fast behavior."""

    @pytest.mark.asyncio
    async def test_second_enhance_failure_discards_everything(self, fake_client, make_image, person_image):
        """With 3 garments and the 2nd enhance failing, no results are returned."""
        calls = 0

        async def enhance(image):
            nonlocal calls
            calls += 1
            if calls == 2:
                raise NoImageReturned()
            return Image(data=b"enhanced:" + image.data, mime_type="image/png")

        fake_client.enhance.side_effect = enhance
        garments = [make_image("a"), make_image("b"), make_image("c")]

        with pytest.raises(NoImageReturned):
            await TryOnPipeline(fake_client).run(person_image, garments)

        # Third garment never started
        assert fake_client.compose.await_count == 2

    @pytest.mark.asyncio
    async def test_compose_failure_stops_before_enhance(self, fake_client, make_image, person_image):
        fake_client.compose.side_effect = TransportError("Gemini API HTTP error: 500", status_code=500)

        with pytest.raises(TransportError):
            await TryOnPipeline(fake_client).run(person_image, [make_image("a")])

        fake_client.enhance.assert_not_called()
