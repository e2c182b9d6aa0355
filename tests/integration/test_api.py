"""Integration tests for the HTTP task endpoints."""

import io

import pytest
from PIL import Image

from docscan.imaging.convert import decode_image


def png_of(width: int, height: int, color=(255, 255, 255)) -> bytes:
    output = io.BytesIO()
    Image.new("RGB", (width, height), color).save(output, format="PNG")
    return output.getvalue()


class TestHealthEndpoint:
    """Tests for the health check endpoint."""

    def test_health_check(self, client):
        """Test health endpoint returns healthy status."""
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "version" in data
        assert "environment" in data


class TestTasksEndpoint:
    """Tests for the task listing endpoint."""

    def test_list_tasks(self, client):
        """Test that all recognised tasks are listed."""
        response = client.get("/api/v1/tasks")

        assert response.status_code == 200
        ids = [task["id"] for task in response.json()["tasks"]]
        assert ids == ["perspectiveTransform", "enhanceBAndW", "grayscale"]


class TestRunTaskEndpoint:
    """Tests for POST /api/v1/tasks/{task}."""

    def test_grayscale(self, client):
        """Test grayscale returns a same-size PNG with equal channels."""
        response = client.post(
            "/api/v1/tasks/grayscale",
            files={"file": ("photo.png", png_of(3, 2, (100, 150, 200)), "image/png")},
        )

        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"
        assert response.headers["x-image-width"] == "3"
        assert response.headers["x-image-height"] == "2"
        result = decode_image(response.content)
        assert tuple(result.pixel(0, 0)) == (141, 141, 141, 255)

    def test_enhance(self, client, sample_png_bytes):
        """Test enhance returns a binary image the size of the upload."""
        response = client.post(
            "/api/v1/tasks/enhanceBAndW",
            files={"file": ("page.png", sample_png_bytes, "image/png")},
        )

        assert response.status_code == 200
        assert response.headers["x-task"] == "enhanceBAndW"
        result = decode_image(response.content)
        assert result.size == (8, 6)
        assert tuple(result.pixel(0, 0)) == (255, 255, 255, 255)
        assert tuple(result.pixel(3, 2)) == (0, 0, 0, 255)

    def test_perspective_transform(self, client, sample_png_bytes):
        """Test perspective transform returns the requested size."""
        response = client.post(
            "/api/v1/tasks/perspectiveTransform",
            files={"file": ("page.png", sample_png_bytes, "image/png")},
            data={"corners": "0,0,7,0,7,5,0,5", "dest_width": "16", "dest_height": "12"},
        )

        assert response.status_code == 200
        result = decode_image(response.content)
        assert result.size == (16, 12)

    def test_perspective_requires_corners(self, client, sample_png_bytes):
        """Test that perspective transform needs corners and a size."""
        response = client.post(
            "/api/v1/tasks/perspectiveTransform",
            files={"file": ("page.png", sample_png_bytes, "image/png")},
        )

        assert response.status_code == 400
        assert "corners" in response.json()["detail"]

    def test_perspective_rejects_bad_corners(self, client, sample_png_bytes):
        """Test that corners must be eight numbers."""
        response = client.post(
            "/api/v1/tasks/perspectiveTransform",
            files={"file": ("page.png", sample_png_bytes, "image/png")},
            data={"corners": "0,0,7,0", "dest_width": "4", "dest_height": "4"},
        )

        assert response.status_code == 400
        assert "8 comma-separated" in response.json()["detail"]

    @pytest.mark.parametrize("corners", ["nan,0,7,0,7,5,0,5", "0,0,inf,0,7,5,0,5"])
    def test_perspective_rejects_non_finite_corners(self, client, sample_png_bytes, corners):
        """Test that NaN and infinite corners are rejected before dispatch."""
        response = client.post(
            "/api/v1/tasks/perspectiveTransform",
            files={"file": ("page.png", sample_png_bytes, "image/png")},
            data={"corners": corners, "dest_width": "4", "dest_height": "4"},
        )

        assert response.status_code == 400
        assert "finite" in response.json()["detail"]

    def test_perspective_rejects_zero_size(self, client, sample_png_bytes):
        """Test that a zero destination size fails validation."""
        response = client.post(
            "/api/v1/tasks/perspectiveTransform",
            files={"file": ("page.png", sample_png_bytes, "image/png")},
            data={"corners": "0,0,7,0,7,5,0,5", "dest_width": "0", "dest_height": "4"},
        )

        assert response.status_code == 422

    def test_perspective_rejects_oversize_output(self, client, sample_png_bytes):
        """Test that the output pixel budget is enforced."""
        response = client.post(
            "/api/v1/tasks/perspectiveTransform",
            files={"file": ("page.png", sample_png_bytes, "image/png")},
            data={"corners": "0,0,7,0,7,5,0,5", "dest_width": "100000", "dest_height": "100000"},
        )

        assert response.status_code == 400
        assert "exceeds" in response.json()["detail"]

    def test_unknown_task(self, client, sample_png_bytes):
        """Test that unknown tasks return 404."""
        response = client.post(
            "/api/v1/tasks/sharpen",
            files={"file": ("page.png", sample_png_bytes, "image/png")},
        )

        assert response.status_code == 404
        assert "Unknown task" in response.json()["detail"]

    def test_rejects_no_file(self, client):
        """Test that the endpoint rejects requests without a file."""
        response = client.post("/api/v1/tasks/grayscale")

        assert response.status_code == 422

    def test_rejects_empty_file(self, client):
        """Test that empty uploads are rejected."""
        response = client.post(
            "/api/v1/tasks/grayscale",
            files={"file": ("empty.png", b"", "image/png")},
        )

        assert response.status_code == 400
        assert "Empty file" in response.json()["detail"]

    def test_rejects_unsupported_format(self, client):
        """Test that non-image uploads are rejected."""
        response = client.post(
            "/api/v1/tasks/grayscale",
            files={"file": ("notes.txt", b"Hello World", "text/plain")},
        )

        assert response.status_code == 400
        assert "Unsupported image type" in response.json()["detail"]

    def test_rejects_decompression_bomb(self, client, monkeypatch, sample_png_bytes):
        """Test that images over Pillow's pixel limit are rejected with 400."""
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 10)

        response = client.post(
            "/api/v1/tasks/grayscale",
            files={"file": ("page.png", sample_png_bytes, "image/png")},
        )

        assert response.status_code == 400
        assert "too large" in response.json()["detail"]

    def test_codec_runs_in_threadpool(self, client, monkeypatch, sample_png_bytes):
        """Test that decoding, dispatch and encoding all leave the event loop."""
        from docscan.api import router as router_module

        offloaded = []
        original = router_module.run_in_threadpool

        async def _spy(func, *args, **kwargs):
            offloaded.append(func.__name__)
            return await original(func, *args, **kwargs)

        monkeypatch.setattr(router_module, "run_in_threadpool", _spy)

        response = client.post(
            "/api/v1/tasks/grayscale",
            files={"file": ("page.png", sample_png_bytes, "image/png")},
        )

        assert response.status_code == 200
        assert offloaded == ["decode_image", "handle_message", "encode_png"]


class TestRootEndpoint:
    """Tests for the root endpoint."""

    def test_root_returns_info(self, client):
        """Test root endpoint returns API info."""
        response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert "message" in data
        assert "version" in data
        assert "docs" in data
