from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from r2h_redirect.rewriter.errors import RewriteError


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class ProxyTarget(FrozenModel):
    scheme: str = Field(..., description="Scheme of the streaming proxy, e.g. http.")
    host: str = Field(..., description="Host of the streaming proxy. IPv6 literals keep their brackets.")
    port: Optional[int] = Field(None, ge=0, le=65535, description="Port of the streaming proxy, if given.")

    @property
    def base_url(self) -> str:
        """The normalized ``scheme://host[:port]/`` form, trailing slash always present."""
        port = f":{self.port}" if self.port is not None else ""
        return f"{self.scheme}://{self.host}{port}/"


class LiveDescriptor(FrozenModel):
    host_port: str = Field(..., description="Multicast address of the live stream, e.g. 239.1.2.3:10000.")
    fcc: Optional[str] = Field(None, description="Fast channel change server carried in the descriptor's own query.")


class PlaybackDescriptor(FrozenModel):
    host: str = Field(..., description="Host (and port) of the RTSP server.")
    path: str = Field("", description="Path of the RTSP resource, leading slash included.")
    query: Optional[str] = Field(None, description="Query carried by the RTSP descriptor, kept verbatim.")


class SelectionInputs(FrozenModel):
    proxy: ProxyTarget
    live: Optional[LiveDescriptor] = None
    playback: Optional[PlaybackDescriptor] = None
    seek: Optional[str] = None
    token: Optional[str] = None
    fcc: Optional[str] = None

    @property
    def has_live(self) -> bool:
        return self.live is not None

    @property
    def has_playback(self) -> bool:
        return self.playback is not None

    @property
    def has_seek(self) -> bool:
        return self.seek is not None


class RedirectLive(FrozenModel):
    kind: Literal["live"] = "live"
    proxy: ProxyTarget
    descriptor: LiveDescriptor
    fcc: Optional[str] = None
    token: Optional[str] = None


class RedirectPlayback(FrozenModel):
    kind: Literal["playback"] = "playback"
    proxy: ProxyTarget
    descriptor: PlaybackDescriptor
    seek: Optional[str] = None
    token: Optional[str] = None


class Reject(FrozenModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: Literal["reject"] = "reject"
    error: RewriteError


Decision = Union[RedirectLive, RedirectPlayback, Reject]
