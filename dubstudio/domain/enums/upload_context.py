from __future__ import annotations
from enum import StrEnum


class UploadContext(StrEnum):
    projectCover = "projectCover"
    projectBanner = "projectBanner"

    @property
    def default_folder(self) -> str:
        return "project_covers" if self is UploadContext.projectCover else "project_banners"

    @property
    def payload_field(self) -> str:
        """ApiPayload field that receives the resulting public id."""
        return "coverImagePublicId" if self is UploadContext.projectCover else "bannerImagePublicId"

    @property
    def label(self) -> str:
        return "Cover" if self is UploadContext.projectCover else "Banner"
