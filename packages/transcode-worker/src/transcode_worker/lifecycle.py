"""
Per-job pipeline: fetch -> inspect -> plan -> transcode -> publish, inside a workspace.

JobPipeline.run() reports stage changes through set_state and raises a
PipelineError subclass on the first failing stage. The workspace is removed
before run() returns or raises.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from hls_queue_shared import Job, JobState, MediaInfo, ObjectStorage, VariantPlan

from .config import TranscodeWorkerSettings
from .ffmpeg_hls import transcode_to_hls
from .planner import plan_for_media
from .probe import probe_media
from .publish import publish_outputs
from .workspace import job_workspace

logger = logging.getLogger(__name__)

StateCallback = Callable[[JobState], None]
Inspector = Callable[[Path], MediaInfo]
Executor = Callable[[Path, Path, VariantPlan, MediaInfo], Path]


class JobPipeline:
    """Runs one job end to end; the scheduler guarantees one run at a time."""

    def __init__(
        self,
        storage: ObjectStorage,
        settings: TranscodeWorkerSettings,
        *,
        inspector: Inspector | None = None,
        executor: Executor | None = None,
    ) -> None:
        self._storage = storage
        self._settings = settings
        self._inspect = inspector or self._probe
        self._transcode = executor or self._ffmpeg

    def _probe(self, path: Path) -> MediaInfo:
        return probe_media(path, ffprobe=self._settings.ffprobe_path)

    def _ffmpeg(
        self, input_path: Path, output_dir: Path, plan: VariantPlan, info: MediaInfo
    ) -> Path:
        return transcode_to_hls(
            input_path,
            output_dir,
            plan,
            duration_sec=info.duration_sec,
            ffmpeg=self._settings.ffmpeg_path,
            preset=self._settings.ffmpeg_preset,
            audio_bitrate=self._settings.audio_bitrate,
            timeout_sec=self._settings.transcode_timeout_sec,
        )

    def output_bucket_for(self, job: Job) -> str:
        return self._settings.output_bucket or job.source.bucket

    def run(self, job: Job, set_state: StateCallback) -> None:
        job_id = job.job_id
        with job_workspace(self._settings.workspace_root, job_id, job.source.key) as ws:
            set_state(JobState.FETCHING)
            logger.info(
                "pipeline: job_id=%s fetching s3://%s/%s",
                job_id,
                job.source.bucket,
                job.source.key,
            )
            self._storage.download_file(job.source.bucket, job.source.key, str(ws.input_path))

            set_state(JobState.INSPECTING)
            info = self._inspect(ws.input_path)
            plan = plan_for_media(info)
            logger.info(
                "pipeline: job_id=%s source=%sx%s duration=%.1fs audio=%s -> %s tier(s)",
                job_id,
                info.width,
                info.height,
                info.duration_sec,
                info.has_audio,
                len(plan.variants),
            )

            set_state(JobState.TRANSCODING)
            self._transcode(ws.input_path, ws.output_dir, plan, info)

            set_state(JobState.PUBLISHING)
            keys = publish_outputs(
                self._storage,
                ws.output_dir,
                self.output_bucket_for(job),
                job.output_prefix,
            )
            logger.info("pipeline: job_id=%s published %s object(s)", job_id, len(keys))
