"""Tests for configuration models."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from floki.models.config import DEFAULT_DIND_IMAGE, DindImage, FlokiConfig, TwoShell, Volume
from floki.models.image import NameImage


class TestFlokiConfig:
    """Test FlokiConfig model."""

    def test_default_values(self):
        """Test default configuration values."""
        config = FlokiConfig(image="foo")

        assert config.image == NameImage(name="foo")
        assert config.init == []
        assert config.shell == "sh"
        assert config.inner_shell == "sh"
        assert config.outer_shell == "sh"
        assert config.mount == Path("/src")
        assert config.docker_switches == []
        assert config.forward_ssh_agent is False
        assert config.forward_user is False
        assert config.dind is False
        assert config.dind_image is None
        assert config.volumes == {}
        assert config.entrypoint.value() == ""

    def test_two_shell_config(self):
        """Test inner and outer shells."""
        config = FlokiConfig(image="foo", shell={"outer": "sh", "inner": "bash"})

        assert config.shell == TwoShell(inner="bash", outer="sh")
        assert config.inner_shell == "bash"
        assert config.outer_shell == "sh"

    def test_dind_enabled(self):
        """Test enabling docker-in-docker with the default image."""
        config = FlokiConfig(image="foo", dind=True)
        assert config.dind_image == DEFAULT_DIND_IMAGE

    def test_dind_image(self):
        """Test docker-in-docker with a custom image."""
        config = FlokiConfig(image="foo", dind={"image": "dind:custom"})

        assert config.dind == DindImage(image="dind:custom")
        assert config.dind_image == "dind:custom"

    def test_dind_rejects_strings(self):
        """Test that dind is not coerced from strings."""
        with pytest.raises(ValidationError) as exc_info:
            FlokiConfig(image="foo", dind="yes")

        assert "dind" in str(exc_info.value)

    def test_volumes(self):
        """Test volume declarations."""
        config = FlokiConfig(
            image="foo",
            volumes={"cargo": {"mount": "/cargo", "shared": True}, "tmp": {"mount": "/tmp"}},
        )

        assert config.volumes["cargo"] == Volume(shared=True, mount=Path("/cargo"))
        assert config.volumes["tmp"].shared is False

    def test_entrypoint_no_suppress(self):
        """Test keeping the image entrypoint."""
        config = FlokiConfig(image="foo", entrypoint={"suppress": False})
        assert config.entrypoint.value() is None

    def test_unknown_fields_rejected(self):
        """Test that the top level schema is strict."""
        with pytest.raises(ValidationError) as exc_info:
            FlokiConfig(image="foo", unknown_field="oops")

        assert "unknown_field" in str(exc_info.value)

    def test_image_required(self):
        """Test that an image must be given."""
        with pytest.raises(ValidationError) as exc_info:
            FlokiConfig()

        assert "image" in str(exc_info.value)

    def test_invalid_image_reported(self):
        """Test that image decode failures name the image field."""
        with pytest.raises(ValidationError) as exc_info:
            FlokiConfig(image={"build": {"name": "foo"}, "exec": {"command": "x"}})

        assert "image" in str(exc_info.value)
        assert "does not match any expected shape" in str(exc_info.value)
