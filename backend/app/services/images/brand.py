"""Brand definitions for multi-size images."""
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Brand:
    """A branded image type and its named size variants.

    Args:
        type: Brand tag, also the storage directory name (e.g. "topic-cover")
        sizes: Size tag mapped to (width, height) in pixels
    """

    type: str
    sizes: dict[str, tuple[int, int]] = field(default_factory=dict)

    @property
    def default_name(self) -> str:
        return self.type.replace("-", "_")

    def default_urls(self, webp: bool, static_url: str) -> dict[str, str]:
        """Build URLs of the bundled default image for every size.

        Keys are ``o`` (original) plus every size tag.
        """
        suffix = "webp" if webp else "jpg"
        urls = {"o": f"{static_url}default/{self.default_name}.{suffix}"}
        for size in self.sizes:
            urls[size] = f"{static_url}default/{self.default_name}_{size}.{suffix}"
        return urls
