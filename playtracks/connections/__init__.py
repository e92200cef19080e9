from .play_publisher import PlayPublisherConnection, fetch_track_listing

__all__ = ["PlayPublisherConnection", "fetch_track_listing"]
