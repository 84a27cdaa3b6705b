"""Ensure a tag exists for the version declared in ``package.json``.

The run is a straight sequence of steps:

1. read the manifest version and publish it as the ``version`` output;
2. list the remote tags and look for one named ``prefix + version + suffix``;
3. stop quietly when that tag exists and overwriting is disabled;
4. resolve the tag message, synthesising a changelog when none was given;
5. create the annotated tag object;
6. point ``refs/tags/<name>`` at it, updating an existing ref when
   overwriting and falling back to creating the ref;
7. publish the tag outputs.

Errors derived from :class:`~autotag.errors.FatalError` propagate to the
caller, which fails the step. Any other error is reported as a warning and
the tag outputs are blanked.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import typing as typ

from . import output
from .changelog import render_changelog
from .errors import (
    FatalError,
    GitHubAPIError,
    RefCreationError,
    TagCreationError,
)
from .github import GitHubClient, Reference, Tag, TagObject
from .manifest import manifest_path, read_manifest_version
from .tags import fetch_tags, find_existing_tag

if typ.TYPE_CHECKING:
    from .config import ActionConfig, RuntimeContext

__all__ = [
    "CHANGELOG_HEAD",
    "TagResult",
    "describe_workspace",
    "resolve_tag_message",
    "run",
    "write_reference",
]

logger = logging.getLogger(__name__)

CHANGELOG_HEAD = "master"

ClientFactory: typ.TypeAlias = (
    "cabc.Callable[[ActionConfig, RuntimeContext], GitHubClient]"
)


@dc.dataclass(frozen=True, slots=True)
class TagResult:
    """Values published once both the tag and its reference exist."""

    name: str
    sha: str
    uri: str
    message: str
    ref: str

    def to_output_mapping(self) -> dict[str, str]:
        """Serialise the result into ``GITHUB_OUTPUT`` assignments."""
        return {
            "tagname": self.name,
            "tagsha": self.sha,
            "taguri": self.uri,
            "tagmessage": self.message,
            "tagref": self.ref,
        }


def _default_client(config: ActionConfig, runtime: RuntimeContext) -> GitHubClient:
    owner, repo = runtime.owner_repo()
    return GitHubClient(config.token, owner, repo, api_url=runtime.api_url)


def describe_workspace(runtime: RuntimeContext) -> None:
    """Emit a debug listing of the workspace contents."""
    try:
        entries = sorted(runtime.workspace.iterdir(), key=lambda entry: entry.name)
    except OSError as exc:
        output.debug(f" Unable to list {runtime.workspace}: {exc}")
        return
    listing = "\n".join(
        f"> {entry.name}" if entry.is_dir() else f"  - {entry.name}"
        for entry in entries
    )
    output.debug(f" Working Directory: {runtime.workspace}:\n{listing}")


def resolve_tag_message(
    client: GitHubClient,
    config: ActionConfig,
    tags: cabc.Sequence[Tag],
    *,
    tag_name: str,
    version: str,
) -> str:
    """Return the message for the new tag.

    An explicit ``tag_message`` wins. Otherwise, when earlier tags exist, the
    commits between the most recent one and :data:`CHANGELOG_HEAD` are
    rendered; failures fall back to ``tag_name``. A blank result becomes
    ``"Version <version>"``.
    """
    message = config.tag_message.strip()
    if not message and tags:
        base = tags[0]
        try:
            commits = client.compare_commits(base.name, CHANGELOG_HEAD)
            message = render_changelog(commits, config.changelog_structure)
        except Exception as exc:  # noqa: BLE001 - any failure falls back
            output.warning(f"Failed to generate changelog from commits: {exc}")
            message = tag_name
    return message if message.strip() else f"Version {version}"


def _create_tag_object(
    client: GitHubClient, runtime: RuntimeContext, tag_name: str, message: str
) -> TagObject:
    if not runtime.sha:
        msg = "GITHUB_SHA is not set."
        raise TagCreationError(msg)
    try:
        tag_object = client.create_tag(tag_name, message, runtime.sha)
    except GitHubAPIError as exc:
        raise TagCreationError(str(exc)) from exc
    output.warning(f"Created new tag: {tag_object.tag}")
    return tag_object


def write_reference(
    client: GitHubClient, tag_object: TagObject, *, update_existing: bool
) -> Reference:
    """Point ``refs/tags/<tag>`` at ``tag_object``.

    When ``update_existing`` is set, a forced update of the existing ref is
    attempted first. If it fails, or was not attempted, the ref is created.

    Raises
    ------
    RefCreationError
        When creating the reference fails.
    """
    name, sha = tag_object.tag, tag_object.sha
    if update_existing:
        output.warning(f"Updating old reference to {name} SHA {sha}")
        try:
            reference = client.update_ref(f"tags/{name}", sha, force=True)
        except GitHubAPIError as exc:
            output.warning(
                f"Unable to update old reference to tags/{name} SHA {sha} ERROR:{exc}"
            )
        else:
            output.warning(f"Updated tags/{name}")
            output.warning(f"Reference {reference.ref} available at {reference.url}")
            return reference

    try:
        reference = client.create_ref(f"refs/tags/{name}", sha)
    except GitHubAPIError as exc:
        output.warning(
            f"Unable to create new reference refs/tags/{name} sha {sha} "
            f"repo {client.repo}"
        )
        raise RefCreationError(str(exc)) from exc
    output.warning(f"Reference {reference.ref} available at {reference.url}")
    return reference


def _tag_version(
    client: GitHubClient, config: ActionConfig, runtime: RuntimeContext, version: str
) -> TagResult | None:
    tags = fetch_tags(client)
    logger.info("Found %d existing tag(s)", len(tags))

    tag_name = config.tag_name(version)
    existing = find_existing_tag(tags, tag_name)
    if existing is not None and not config.overwrite:
        return None

    message = resolve_tag_message(
        client, config, tags, tag_name=tag_name, version=version
    )
    tag_object = _create_tag_object(client, runtime, tag_name, message)
    reference = write_reference(
        client, tag_object, update_existing=existing is not None
    )
    return TagResult(
        name=tag_name,
        sha=tag_object.sha,
        uri=reference.url,
        message=message.strip(),
        ref=reference.ref,
    )


def run(
    config: ActionConfig,
    runtime: RuntimeContext,
    *,
    client_factory: ClientFactory = _default_client,
) -> TagResult | None:
    """Execute the tagging run and publish its outputs.

    Returns
    -------
    TagResult or None
        The published result, or None when the tag already existed without
        overwrite or a non-fatal error blanked the outputs.

    Raises
    ------
    FatalError
        For a missing manifest and for tag or reference creation failures.
    """
    try:
        path = manifest_path(runtime.workspace, config.package_root)
        version = read_manifest_version(path)
        output.set_output("version", version)
        output.debug(f" Detected version {version}")

        with client_factory(config, runtime) as client:
            result = _tag_version(client, config, runtime, version)
    except FatalError:
        raise
    except Exception as exc:  # noqa: BLE001 - outputs are blanked on any other failure
        output.warning(str(exc))
        output.set_outputs(dict.fromkeys(output.TAG_OUTPUT_KEYS, ""))
        return None

    if result is not None:
        output.set_outputs(result.to_output_mapping())
    return result
