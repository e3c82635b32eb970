"""Attribute names Graphviz understands, grouped by where they may appear."""

from enum import Enum

from dotlang.errors import ValidationError

EDGE_ATTRIBUTE_KEYS = frozenset({
    "URL", "arrowhead", "arrowsize", "arrowtail", "class", "color", "colorscheme",
    "comment", "constraint", "decorate", "dir", "edgeURL", "edgehref", "edgetarget",
    "edgetooltip", "fillcolor", "fontcolor", "fontname", "fontsize", "headURL",
    "head_lp", "headclip", "headhref", "headlabel", "headport", "headtarget",
    "headtooltip", "href", "id", "label", "labelURL", "labelangle", "labeldistance",
    "labelfloat", "labelfontcolor", "labelfontname", "labelfontsize", "labelhref",
    "labeltarget", "labeltooltip", "layer", "len", "lhead", "lp", "ltail", "minlen",
    "nojustify", "penwidth", "pos", "samehead", "sametail", "showboxes", "style",
    "tailURL", "tail_lp", "tailclip", "tailhref", "taillabel", "tailport", "tailtarget",
    "tailtooltip", "target", "tooltip", "weight", "xlabel", "xlp",
})

NODE_ATTRIBUTE_KEYS = frozenset({
    "URL", "area", "class", "color", "colorscheme", "comment", "distortion",
    "fillcolor", "fixedsize", "fontcolor", "fontname", "fontsize", "gradientangle",
    "group", "height", "href", "id", "image", "imagepos", "imagescale", "label",
    "labelloc", "layer", "margin", "nojustify", "ordering", "orientation", "penwidth",
    "peripheries", "pin", "pos", "rects", "regular", "root", "samplepoints", "shape",
    "shapefile", "showboxes", "sides", "skew", "sortv", "style", "target", "tooltip",
    "vertices", "width", "xlabel", "xlp", "z",
})

GRAPH_ATTRIBUTE_KEYS = frozenset({
    "Damping", "K", "TBbalance", "URL", "_background", "bb", "bgcolor", "center",
    "charset", "class", "clusterrank", "colorscheme", "comment", "compound",
    "concentrate", "defaultdist", "dim", "dimen", "diredgeconstraints", "dpi",
    "epsilon", "esep", "fontcolor", "fontname", "fontnames", "fontpath", "fontsize",
    "forcelabels", "gradientangle", "href", "id", "imagepath", "inputscale", "label",
    "label_scheme", "labeljust", "labelloc", "landscape", "layerlistsep", "layers",
    "layerselect", "layersep", "layout", "levels", "levelsgap", "lheight", "lp",
    "lwidth", "margin", "maxiter", "mclimit", "mindist", "mode", "model", "mosek",
    "newrank", "nodesep", "nojustify", "normalize", "notranslate", "nslimit",
    "nslimit1", "ordering", "orientation", "outputorder", "overlap", "overlap_scaling",
    "overlap_shrink", "pack", "packmode", "pad", "page", "pagedir", "quadtree",
    "quantum", "rankdir", "ranksep", "ratio", "remincross", "repulsiveforce",
    "resolution", "root", "rotate", "rotation", "scale", "searchsize", "sep",
    "showboxes", "size", "smoothing", "sortv", "splines", "start", "style",
    "stylesheet", "target", "truecolor", "viewport", "voro_margin", "xdotversion",
})

SUBGRAPH_ATTRIBUTE_KEYS = frozenset({"rank"})

CLUSTER_SUBGRAPH_ATTRIBUTE_KEYS = frozenset({
    "K", "URL", "area", "bgcolor", "class", "color", "colorscheme", "fillcolor",
    "fontcolor", "fontname", "fontsize", "gradientangle", "href", "id", "label",
    "labeljust", "labelloc", "layer", "lheight", "lp", "lwidth", "margin", "nojustify",
    "pencolor", "penwidth", "peripheries", "sortv", "style", "target", "tooltip",
})


class AttributeScope(str, Enum):
    GRAPH = "graph"
    SUBGRAPH = "subgraph"
    CLUSTER_SUBGRAPH = "cluster_subgraph"
    NODE = "node"
    EDGE = "edge"


_KEYS = {
    AttributeScope.GRAPH: GRAPH_ATTRIBUTE_KEYS,
    AttributeScope.SUBGRAPH: SUBGRAPH_ATTRIBUTE_KEYS,
    AttributeScope.CLUSTER_SUBGRAPH: CLUSTER_SUBGRAPH_ATTRIBUTE_KEYS,
    AttributeScope.NODE: NODE_ATTRIBUTE_KEYS,
    AttributeScope.EDGE: EDGE_ATTRIBUTE_KEYS,
}


def keys_for(scope: AttributeScope | str) -> frozenset[str]:
    return _KEYS[AttributeScope(scope)]


def is_attribute_key(scope: AttributeScope | str, key: str) -> bool:
    return key in keys_for(scope)


def ensure_attribute_key(scope: AttributeScope | str, key: str) -> str:
    """Return ``key`` unchanged, or raise ``ValidationError`` if ``scope`` does not know it."""
    if not is_attribute_key(scope, key):
        raise ValidationError(f"unknown {AttributeScope(scope).value} attribute: {key}")
    return key
