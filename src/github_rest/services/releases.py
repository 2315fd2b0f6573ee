"""Release and release asset endpoints.

See: https://docs.github.com/en/rest/releases
"""

from __future__ import annotations

import os
from pathlib import Path

from github_rest.context import Context
from github_rest.response import ByteSink, Response
from github_rest.schemas import Release, ReleaseAsset, ReleaseParams

from .base import RepoScopedService


class ReleasesService(RepoScopedService):
    """Releases of a single repository."""

    def list(self, ctx: Context, page_size: int, page_no: int) -> tuple[list[Release], Response]:
        """List releases page by page."""
        req = self._client.new_page_request(
            ctx, "GET", f"{self._prefix}/releases", page_size, page_no
        )
        return self._client.do(req, list[Release])

    def latest(self, ctx: Context) -> tuple[Release, Response]:
        """Get the latest published full release."""
        req = self._client.new_request(ctx, "GET", f"{self._prefix}/releases/latest")
        return self._client.do(req, Release)

    def get(self, ctx: Context, release_id: int) -> tuple[Release, Response]:
        req = self._client.new_request(ctx, "GET", f"{self._prefix}/releases/{release_id}")
        return self._client.do(req, Release)

    def get_by_tag(self, ctx: Context, tag: str) -> tuple[Release, Response]:
        req = self._client.new_request(ctx, "GET", f"{self._prefix}/releases/tags/{tag}")
        return self._client.do(req, Release)

    def create(self, ctx: Context, params: ReleaseParams) -> tuple[Release, Response]:
        """Create a release (and its tag if it does not exist yet)."""
        req = self._client.new_request(ctx, "POST", f"{self._prefix}/releases", params)
        self._log.debug("Creating release {}", params.tag_name)
        return self._client.do(req, Release)

    def update(
        self, ctx: Context, release_id: int, params: ReleaseParams
    ) -> tuple[Release, Response]:
        req = self._client.new_request(
            ctx, "PATCH", f"{self._prefix}/releases/{release_id}", params
        )
        return self._client.do(req, Release)

    def delete(self, ctx: Context, release_id: int) -> Response:
        """Delete a release. The git tag is left in place."""
        req = self._client.new_request(ctx, "DELETE", f"{self._prefix}/releases/{release_id}")
        _, resp = self._client.do(req)
        return resp

    def upload_asset(
        self,
        ctx: Context,
        release_id: int,
        file_path: str | os.PathLike[str],
        label: str = "",
    ) -> tuple[ReleaseAsset, Response]:
        """Upload a local file as a release asset.

        The asset is named after the file's base name.

        Args:
            ctx: Request context
            release_id: Release to attach the asset to
            file_path: Local file to upload
            label: Optional display label

        Raises:
            FileError: If the file cannot be opened
        """
        params: dict[str, str | int] = {}
        if name := Path(file_path).name:
            params["name"] = name
        if label:
            params["label"] = label

        path = f"{self._prefix}/releases/{release_id}/assets"
        with self._client.upload_request(ctx, path, file_path, params=params) as req:
            self._log.debug("Uploading asset {} to release {}", name, release_id)
            return self._client.do(req, ReleaseAsset)

    def download_asset(self, ctx: Context, tag: str, name: str, sink: ByteSink) -> Response:
        """Stream a release asset into sink.

        Downloads go through the web host, not the API host.
        """
        req = self._client.new_download_request(
            ctx, f"/{self.owner}/{self.repo}/releases/download/{tag}/{name}"
        )
        _, resp = self._client.do(req, sink)
        return resp
