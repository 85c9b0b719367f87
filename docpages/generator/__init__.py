"""Markdown rendering, HTML post-processing and heading anchors."""

from .anchors import AnchorExtractor, HeadingEntry, RenderedPage, render_anchor_items
from .fenced_attributes import FenceInfo, FencedAttributeExtension, parse_fence_info
from .link_rewriter import LinkContext, rewrite_links, rewrite_target
from .postprocess import (
    DEFAULT_STAGES,
    HtmlPostProcessor,
    PostProcessingError,
    PostProcessStage,
    RenderContext,
)
from .renderer import HtmlContentRenderer

__all__ = [
    "DEFAULT_STAGES",
    "AnchorExtractor",
    "FenceInfo",
    "FencedAttributeExtension",
    "HeadingEntry",
    "HtmlContentRenderer",
    "HtmlPostProcessor",
    "LinkContext",
    "PostProcessStage",
    "PostProcessingError",
    "RenderContext",
    "RenderedPage",
    "parse_fence_info",
    "render_anchor_items",
    "rewrite_links",
    "rewrite_target",
]
