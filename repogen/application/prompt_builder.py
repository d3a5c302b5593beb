"""Prompt composition for a single file generation step."""

from repogen.domain.models.manifest import FileSpec

NO_CONTEXT_PLACEHOLDER = "No files have been created yet. This is the first file."


def build_file_prompt(spec: FileSpec, project_context: str, rendered_context: str) -> str:
    """Compose the generation prompt for one file.

    Sections, in order: target path, file description, the caller's project
    context (verbatim), and excerpts of files generated earlier in the run.
    """
    existing = rendered_context if rendered_context else NO_CONTEXT_PLACEHOLDER
    return (
        "Based on the following project details, generate the complete and raw "
        f"source code for the file: {spec.path}.\n"
        "Respond with the file content only, without explanations or markdown fences.\n"
        "\n"
        "**File Description:**\n"
        f"{spec.description}\n"
        "\n"
        "**Overall Project Context:**\n"
        f"{project_context}\n"
        "\n"
        "**Relevant Existing Files (for context and correct imports):**\n"
        f"{existing}\n"
    )
