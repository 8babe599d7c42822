"""Platform-independent application descriptor.

This module defines the Pydantic models for the app descriptor that drives
synchronization: identity, author, and the icon/splash resources declared
either at root level or per platform.
"""

from collections.abc import Iterable, Iterator
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field


class Resource(BaseModel):
    """An icon or splash screen image declared by the app.

    Attributes:
        src: Image path relative to the app root.
        width: Declared width in pixels, if any.
        height: Declared height in pixels, if any.
        density: Declared density qualifier (e.g., "hdpi"), if any.
        platform: Platform the resource belongs to. None means shared.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    src: Annotated[str, Field(min_length=1, description="Path relative to app root")]
    width: Annotated[int | None, Field(gt=0, description="Width in pixels")] = None
    height: Annotated[int | None, Field(gt=0, description="Height in pixels")] = None
    density: Annotated[str | None, Field(description="Density qualifier")] = None
    platform: Annotated[str | None, Field(description="Owning platform")] = None

    @property
    def is_sized(self) -> bool:
        return self.width is not None or self.height is not None

    @property
    def is_default(self) -> bool:
        """A resource with no size or density applies to every slot."""
        return not self.is_sized and self.density is None


class ResourceSet:
    """Queryable, ordered collection of resources for one platform."""

    def __init__(self, resources: Iterable[Resource] = ()) -> None:
        self._resources: tuple[Resource, ...] = tuple(resources)

    def __iter__(self) -> Iterator[Resource]:
        return iter(self._resources)

    def __len__(self) -> int:
        return len(self._resources)

    def get_by_size(self, width: int, height: int) -> Resource | None:
        """Return the first resource matching the requested size.

        A resource must declare at least one dimension; an undeclared
        dimension matches any requested value.
        """
        for res in self._resources:
            if not res.is_sized:
                continue
            if (res.width is None or res.width == width) and (
                res.height is None or res.height == height
            ):
                return res
        return None

    def get_default(self) -> Resource | None:
        """Return the last resource with neither size nor density."""
        default: Resource | None = None
        for res in self._resources:
            if res.is_default:
                default = res
        return default


class AppConfig(BaseModel):
    """Application descriptor consumed by the reconcilers.

    Attributes:
        name: Display name of the app.
        version: Dotted app version (e.g., "1.2.3").
        package_name: Reverse-DNS package identifier.
        author: Publisher display name.
        icons: Declared icon resources.
        splash_screens: Declared splash screen resources.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: Annotated[str, Field(description="App display name")]
    version: Annotated[str, Field(description="Dotted app version")] = "0.0.1"
    package_name: Annotated[str, Field(min_length=1, description="Package identifier")]
    author: Annotated[str, Field(description="Publisher display name")] = ""
    icons: Annotated[
        list[Resource],
        Field(default_factory=list, description="Icon resources"),
    ]
    splash_screens: Annotated[
        list[Resource],
        Field(default_factory=list, description="Splash screen resources"),
    ]

    def get_icons(self, platform: str | None = None) -> ResourceSet:
        """Icons for a platform: platform-specific first, then shared ones."""
        return _select(self.icons, platform)

    def get_splash_screens(self, platform: str | None = None) -> ResourceSet:
        """Splash screens for a platform: platform-specific first, then shared ones."""
        return _select(self.splash_screens, platform)


def _select(resources: list[Resource], platform: str | None) -> ResourceSet:
    specific = [r for r in resources if platform is not None and r.platform == platform]
    shared = [r for r in resources if r.platform is None]
    return ResourceSet([*specific, *shared])
