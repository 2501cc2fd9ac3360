"""
Video processing module for frame sampling.
"""

from .frame_sampler import FfmpegVideoResource, open_video_resource, sample_frames

__all__ = ["FfmpegVideoResource", "open_video_resource", "sample_frames"]
