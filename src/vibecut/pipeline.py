"""Edit orchestration — license, filters, transcode, overlay, record.

Steps run strictly in order on the calling thread:
  1. License lookup (store errors are fatal).
  2. Filter resolution (remote, else keyword rules).
  3. Normalization to three directives, trial watermark if unlicensed.
  4. ffmpeg transcode (fatal on failure; nothing is recorded).
  5. Optional overlay pass (never fatal).
  6. Project record with the final output path (store errors are fatal).
"""

import logging
from pathlib import Path

from .config import load_config
from .filters import normalize
from .inference import GeminiClient
from .license import is_licensed
from .models import EditOutcome, EditRequest, ProjectRecord
from .overlay import maybe_composite_overlay
from .process import SubprocessRunner
from .resolver import resolve_filters
from .store import EditStore
from .transcode import transcode

logger = logging.getLogger(__name__)


def run_edit(
    request: EditRequest,
    store: EditStore,
    *,
    client,
    runner,
    config: dict,
) -> EditOutcome:
    """Run one edit end to end.

    Raises:
        PersistenceError: License lookup or project record failed.
        TranscodeError: ffmpeg failed.
    """
    licensed = is_licensed(store, request.license_key)

    candidate, used_remote = resolve_filters(request.prompt, client)
    chain, watermarked = normalize(candidate, licensed)
    logger.info(
        "Filters (%s%s): %s",
        "remote" if used_remote else "keyword rules",
        ", trial watermark" if watermarked else "",
        " | ".join(chain),
    )

    output = transcode(
        request.input_path,
        chain,
        runner,
        ffmpeg=config["ffmpeg"],
        timeout=config["timeouts"]["transcode"],
    )

    final, overlay_applied = maybe_composite_overlay(
        output, request.prompt, request.overlay_override, runner, config,
    )

    store.add_project(ProjectRecord(
        input_path=str(request.input_path),
        output_path=str(final),
        prompt=request.prompt,
    ))

    return EditOutcome(
        output_path=final,
        filters=chain,
        used_remote_inference=used_remote,
        watermarked=watermarked,
        overlay_applied=overlay_applied,
    )


class EditPipeline:
    """Edit entry points with their collaborators bound once.

    Safe to share across threads: the store pools its own connections and
    every external tool call is a separate subprocess.
    """

    def __init__(self, store: EditStore, client, runner, config: dict):
        self.store = store
        self.client = client
        self.runner = runner
        self.config = config

    @classmethod
    def from_config(cls, config: dict | None = None) -> "EditPipeline":
        config = config if config is not None else load_config()
        store = EditStore.from_url(config["database"])
        store.init_schema()
        return cls(
            store=store,
            client=GeminiClient.from_config(config),
            runner=SubprocessRunner(),
            config=config,
        )

    def check_license(self, key: str | None) -> bool:
        return is_licensed(self.store, key)

    def run(self, request: EditRequest) -> EditOutcome:
        return run_edit(
            request,
            self.store,
            client=self.client,
            runner=self.runner,
            config=self.config,
        )

    def run_edit(
        self,
        input_path: str | Path,
        prompt: str,
        license_key: str | None = None,
        overlay_override: bool | None = None,
    ) -> EditOutcome:
        return self.run(EditRequest(
            input_path=Path(input_path),
            prompt=prompt,
            license_key=license_key,
            overlay_override=overlay_override,
        ))
