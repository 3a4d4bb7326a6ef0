"""Project the word taxonomy into a browsable topic tree."""
from __future__ import annotations

from topic_quiz.models import SentenceTopicIndex, Taxonomy, TopicNode, WordGroup
from topic_quiz.parsers.taxonomy_parser import PRONOUN_SUBGROUPS

PATH_SEPARATOR = " / "

# Display order of the simple (single-level) families
SIMPLE_FAMILIES = ("artcl", "conj", "prep", "advrb", "noun")


def _group_node(topic_id: str, fallback_label: str, group: WordGroup) -> TopicNode:
    return TopicNode(
        id=topic_id,
        label=group.name or fallback_label,
        info=group.info,
        children=tuple(
            TopicNode(id=f"word:{w.id}", label=w.word, info=w.info)
            for w in group.words
        ),
    )


def build_topic_tree(taxonomy: Taxonomy) -> list[TopicNode]:
    """Raw tree: group:* internal nodes, word:* leaves, no counts yet."""
    nodes = [
        _group_node(f"group:{key}", key, getattr(taxonomy, key))
        for key in SIMPLE_FAMILIES
    ]

    pron = taxonomy.pron
    pron_children = tuple(
        _group_node(f"group:pron.{part}", part, pron.subgroups[part])
        for part in PRONOUN_SUBGROUPS
        if part in pron.subgroups
    )
    nodes.append(TopicNode(
        id="group:pron",
        label=pron.name or "pron",
        info=pron.info,
        children=pron_children,
    ))

    # Verbs are listed by root only; conjugations stay out of the tree
    nodes.append(_group_node("group:verb", "verb", taxonomy.verb))
    return nodes


def annotate_topic_tree(
    nodes: list[TopicNode], index: SentenceTopicIndex
) -> list[TopicNode]:
    """Return a copy of *nodes* with candidate_count and path_label filled in."""
    return [_annotate(n, (), index) for n in nodes]


def _annotate(
    node: TopicNode, parent_path: tuple[str, ...], index: SentenceTopicIndex
) -> TopicNode:
    path = parent_path + (node.label,)
    return TopicNode(
        id=node.id,
        label=node.label,
        info=node.info,
        children=tuple(_annotate(c, path, index) for c in node.children),
        candidate_count=len(index.topic_to_sentences.get(node.id, ())),
        path_label=PATH_SEPARATOR.join(path),
    )


def flatten_topic_tree(nodes: list[TopicNode]) -> list[TopicNode]:
    """All nodes in pre-order (parent before children, siblings in order)."""
    flat: list[TopicNode] = []
    stack = list(reversed(nodes))
    while stack:
        node = stack.pop()
        flat.append(node)
        stack.extend(reversed(node.children))
    return flat
