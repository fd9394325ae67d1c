"""Spatial (bbox-based) grouping of OCR fragments into candidate item lines."""

from billsplit.domain.receipt import OcrFragment

from .common import DEFAULT_PARSER_CONFIG, ParserConfig


def _is_same_line(a: OcrFragment, b: OcrFragment, config: ParserConfig) -> bool:
    """Vertically close enough to be printed on the same line."""
    y_diff = abs(a.bounding.top - b.bounding.top)
    return y_diff < max(a.bounding.height, b.bounding.height) * config.same_line_ratio


def _is_nearby(a: OcrFragment, b: OcrFragment, config: ParserConfig) -> bool:
    """Horizontally close, regardless of vertical offset."""
    return abs(a.bounding.left - b.bounding.left) < config.proximity_threshold


def group_by_proximity(
    fragments: list[OcrFragment],
    config: ParserConfig | None = None,
) -> list[list[OcrFragment]]:
    """
    Partition fragments into candidate item groups.

    Single greedy pass in input order: each unassigned fragment seeds a group
    and pulls in every other unassigned fragment that is on the same line as
    the seed or horizontally near it. Membership is tested against the seed
    only, so the result depends on fragment order.
    """
    config = config or DEFAULT_PARSER_CONFIG
    groups: list[list[OcrFragment]] = []
    processed: set[int] = set()

    for index, fragment in enumerate(fragments):
        if index in processed:
            continue

        group = [fragment]
        processed.add(index)

        for other_index, other in enumerate(fragments):
            if other_index in processed:
                continue
            if _is_same_line(fragment, other, config) or _is_nearby(fragment, other, config):
                group.append(other)
                processed.add(other_index)

        groups.append(group)

    return groups


def _group_y_span(group: list[OcrFragment]) -> tuple[float, float]:
    """Return (min_top, max_bottom) span for a group."""
    return min(f.bounding.top for f in group), max(f.bounding.bottom for f in group)


def attach_numeric_columns(
    groups: list[list[OcrFragment]],
    numeric_fragments: list[OcrFragment],
) -> list[list[OcrFragment]]:
    """
    Attach bare qty/price cells to the group printed on the same row.

    A number joins the group whose vertical span contains its vertical centre;
    when several do, the one whose span centre is closest wins. Numbers
    outside every group are dropped. Returns new group lists; the inputs are
    not modified.
    """
    attached = [list(group) for group in groups]
    spans = [_group_y_span(group) if group else None for group in attached]

    for number in numeric_fragments:
        center_y = number.bounding.center_y
        best_idx = None
        best_distance = None
        for idx, span in enumerate(spans):
            if span is None:
                continue
            span_top, span_bottom = span
            if not span_top <= center_y <= span_bottom:
                continue
            distance = abs(center_y - (span_top + span_bottom) / 2)
            if best_distance is None or distance < best_distance:
                best_distance = distance
                best_idx = idx
        if best_idx is not None:
            attached[best_idx].append(number)

    return attached
