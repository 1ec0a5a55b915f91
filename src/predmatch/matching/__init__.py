"""Cross-venue market matching: normalization, pairwise scoring, group assignment."""

from predmatch.matching.grouping import assign_groups, canonical_title, find_merge_target
from predmatch.matching.scorer import find_all_matches, score_pair, score_titles
from predmatch.matching.text import extract_entities, normalize, title_similarity

__all__ = [
    "normalize",
    "extract_entities",
    "title_similarity",
    "score_titles",
    "score_pair",
    "find_all_matches",
    "assign_groups",
    "canonical_title",
    "find_merge_target",
]
