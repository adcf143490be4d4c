from __future__ import annotations

"""
Synthesized files for Hugging Face Spaces: the README descriptor with
its YAML front matter, and a stub entry point for SDKs that need one.
"""

from typing import Optional

from structure_builder.domain.publish_models import SDK_ENTRYPOINTS, SDK_VERSIONS, SpaceForm
from structure_builder.domain.serialization import forest_to_json
from structure_builder.domain.tree_models import Forest

DESCRIPTOR_PATH = "README.md"

_ENTRYPOINT_STUBS = {
    "gradio": (
        "import gradio as gr\n"
        "\n"
        "\n"
        "def greet(name):\n"
        "    return f\"Hello, {{name}}!\"\n"
        "\n"
        "\n"
        "demo = gr.Interface(fn=greet, inputs=\"text\", outputs=\"text\", title=\"{title}\")\n"
        "\n"
        "if __name__ == \"__main__\":\n"
        "    demo.launch()\n"
    ),
    "streamlit": (
        "import streamlit as st\n"
        "\n"
        "st.title(\"{title}\")\n"
        "st.write(\"Hello from Streamlit!\")\n"
    ),
    "static": (
        "<!DOCTYPE html>\n"
        "<html>\n"
        "<head><meta charset=\"utf-8\"><title>{title}</title></head>\n"
        "<body><h1>{title}</h1></body>\n"
        "</html>\n"
    ),
}


def entrypoint_path(sdk: str) -> Optional[str]:
    """Return the root file the SDK launches, if it requires one."""
    return SDK_ENTRYPOINTS.get(sdk)


def build_descriptor(form: SpaceForm, forest: Forest) -> str:
    """
    Render the Space README.

    The body embeds the whole serialized forest so the published Space
    records the structure it was generated from.
    """
    app_file = entrypoint_path(form.sdk) or "app.py"
    return (
        "---\n"
        f"title: {form.space_name}\n"
        "emoji: 🚀\n"
        "colorFrom: blue\n"
        "colorTo: red\n"
        f"sdk: {form.sdk}\n"
        f"{_sdk_version_line(form)}"
        f"app_file: {app_file}\n"
        "pinned: false\n"
        f"license: {form.license}\n"
        "---\n"
        "\n"
        f"# {form.space_name}\n"
        "\n"
        f"{form.description}\n"
        "\n"
        "This space was created using Structure Builder.\n"
        "\n"
        "## Project Structure\n"
        "\n"
        "```\n"
        f"{forest_to_json(forest)}\n"
        "```\n"
    )


def sdk_version(form: SpaceForm) -> Optional[str]:
    """Return the runtime version for the form's SDK, if it has a runtime."""
    return form.sdk_version or SDK_VERSIONS.get(form.sdk)


def _sdk_version_line(form: SpaceForm) -> str:
    version = sdk_version(form)
    return f"sdk_version: \"{version}\"\n" if version else ""


def build_entrypoint_stub(form: SpaceForm) -> str:
    template = _ENTRYPOINT_STUBS.get(form.sdk, "")
    return template.format(title=form.space_name)
