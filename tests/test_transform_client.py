import base64
import unittest
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

from tests._test_path import SRC  # noqa: F401

from headshotstudio.core.models import ImagePayload
from headshotstudio.services import transform_client as tc


def _fake_genai(generate: AsyncMock):
    return SimpleNamespace(aio=SimpleNamespace(models=SimpleNamespace(generate_content=generate)))


def _response(parts):
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=parts))])


def _inline(data, mime_type="image/png"):
    return SimpleNamespace(inline_data=SimpleNamespace(data=data, mime_type=mime_type), text=None)


PHOTO = ImagePayload(data=b"jpeg-bytes", mime_type="image/jpeg")


class TestExtractFirstImage(unittest.TestCase):
    def test_no_candidates(self):
        self.assertIsNone(tc.extract_first_image(SimpleNamespace(candidates=None)))
        self.assertIsNone(tc.extract_first_image(SimpleNamespace(candidates=[])))

    def test_no_content_or_parts(self):
        self.assertIsNone(tc.extract_first_image(SimpleNamespace(candidates=[SimpleNamespace(content=None)])))
        self.assertIsNone(tc.extract_first_image(_response(None)))
        self.assertIsNone(tc.extract_first_image(_response([])))

    def test_text_only(self):
        parts = [SimpleNamespace(inline_data=None, text="I can't do that")]
        self.assertIsNone(tc.extract_first_image(_response(parts)))

    def test_first_inline_image_wins_and_keeps_mime(self):
        parts = [
            SimpleNamespace(inline_data=None, text="caption"),
            _inline(b"one", "image/webp"),
            _inline(b"two"),
        ]
        self.assertEqual(tc.extract_first_image(_response(parts)), ImagePayload(b"one", "image/webp"))

    def test_base64_string_data_and_missing_mime(self):
        parts = [_inline(base64.b64encode(b"raw").decode("ascii"), None)]
        self.assertEqual(tc.extract_first_image(_response(parts)), ImagePayload(b"raw", "image/png"))


class TestImageTransformClient(unittest.IsolatedAsyncioTestCase):
    async def test_sends_image_and_prompt_as_two_parts(self):
        generate = AsyncMock(return_value=_response([_inline(b"out")]))
        client = tc.ImageTransformClient(api_key="k", model="some-model", client=_fake_genai(generate))

        result = await client.transform(PHOTO, "make it pro")

        self.assertEqual(result, ImagePayload(b"out", "image/png"))
        generate.assert_awaited_once()
        kwargs = generate.await_args.kwargs
        self.assertEqual(kwargs["model"], "some-model")
        parts = kwargs["contents"].parts
        self.assertEqual(len(parts), 2)
        self.assertEqual(parts[0].inline_data.data, b"jpeg-bytes")
        self.assertEqual(parts[0].inline_data.mime_type, "image/jpeg")
        self.assertEqual(parts[1].text, "make it pro")

    async def test_no_image_raises_fixed_message(self):
        client = tc.ImageTransformClient(
            api_key="k", client=_fake_genai(AsyncMock(return_value=SimpleNamespace(candidates=[])))
        )
        with self.assertRaises(tc.TransformFailed) as cm:
            await client.transform(PHOTO, "p")
        self.assertEqual(cm.exception.message, tc.NO_IMAGE_MESSAGE)

    async def test_remote_error_message_carried(self):
        generate = AsyncMock(side_effect=RuntimeError("quota exceeded"))
        client = tc.ImageTransformClient(api_key="k", client=_fake_genai(generate))
        with self.assertRaises(tc.TransformFailed) as cm:
            await client.transform(PHOTO, "p")
        self.assertEqual(cm.exception.message, "quota exceeded")
        self.assertIsInstance(cm.exception.__cause__, RuntimeError)
        self.assertEqual(generate.await_count, 1)  # no retry

    async def test_undecodable_inline_data_raises_fixed_message(self):
        generate = AsyncMock(return_value=_response([_inline("abc")]))
        client = tc.ImageTransformClient(api_key="k", client=_fake_genai(generate))
        with self.assertRaises(tc.TransformFailed) as cm:
            await client.transform(PHOTO, "p")
        self.assertEqual(cm.exception.message, tc.NO_IMAGE_MESSAGE)

    async def test_undecodable_part_skipped_for_next_image(self):
        generate = AsyncMock(return_value=_response([_inline("not base64!"), _inline(b"good")]))
        client = tc.ImageTransformClient(api_key="k", client=_fake_genai(generate))
        result = await client.transform(PHOTO, "p")
        self.assertEqual(result, ImagePayload(b"good", "image/png"))

    async def test_missing_api_key(self):
        client = tc.ImageTransformClient(api_key="")
        with self.assertRaises(tc.TransformFailed) as cm:
            await client.transform(PHOTO, "p")
        self.assertEqual(cm.exception.message, tc.MISSING_KEY_MESSAGE)

    async def test_client_created_lazily_once(self):
        generate = AsyncMock(return_value=_response([_inline(b"out")]))
        with patch.object(tc.genai, "Client", return_value=_fake_genai(generate)) as ctor:
            client = tc.ImageTransformClient(api_key="secret")
            ctor.assert_not_called()
            await client.transform(PHOTO, "p")
            await client.transform(PHOTO, "p")
        ctor.assert_called_once_with(api_key="secret")
        self.assertEqual(generate.await_count, 2)
