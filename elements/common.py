#!/usr/bin/python3

"""Processed map elements: tagged nodes and ways in block coordinates.

Elements are read from a JSON document of the form

    {"nodes": [{"id": 1, "x": 0, "z": 0, "tags": {"power": "pole"}}, ...],
     "ways": [{"id": 7, "nodes": [1, 2, 3], "tags": {"railway": "rail"}}, ...],
     "relations": [{"id": 9, "tags": {"natural": "water"},
                    "members": [{"role": "outer", "way": 7}, ...]}, ...]}

Way nodes are given by node id and must be listed under "nodes"; relation
members refer to ways by id. Only "outer" and "inner" members are kept.
Coordinates are already projected onto the world's X-Z plane.
"""

import json
import logging
from collections import namedtuple

from editor.geometry import XZPoint

logger = logging.getLogger(__name__)


class ProcessedNode(namedtuple('ProcessedNode', 'id tags x z')):
    """A tagged point at block column (x, z)."""

    __slots__ = ()

    def xz(self):
        return XZPoint(self.x, self.z)


ProcessedWay = namedtuple('ProcessedWay', 'id nodes tags')
ProcessedMember = namedtuple('ProcessedMember', 'role way')
ProcessedRelation = namedtuple('ProcessedRelation', 'id members tags')
Elements = namedtuple('Elements', 'nodes ways relations')

MEMBER_ROLES = ('outer', 'inner')


def _tags(raw, what):
    tags = raw.get('tags') or {}
    if not isinstance(tags, dict):
        raise ValueError('tags of {} must be an object'.format(what))
    return {str(k): str(v) for k, v in tags.items()}


def _section(document, key):
    if key not in document:
        return []
    values = document[key]
    if not isinstance(values, list):
        raise ValueError('{} must be a JSON array'.format(key))
    return values


def parse_elements(document):
    """Build the Elements held in a decoded JSON document.

    Raise ValueError if the document is malformed, a way refers to a node or
    a relation to a way that does not exist.
    """
    if not isinstance(document, dict):
        raise ValueError('elements must be a JSON object')
    nodes, by_id = [], {}
    for raw in _section(document, 'nodes'):
        try:
            node = ProcessedNode(int(raw['id']), _tags(raw, 'a node'),
                                 int(raw['x']), int(raw['z']))
        except (KeyError, TypeError) as err:
            raise ValueError('malformed node {!r}: {}'.format(raw, err))
        nodes.append(node)
        by_id[node.id] = node

    ways = []
    for raw in _section(document, 'ways'):
        try:
            way_id = int(raw['id'])
            node_ids = list(raw['nodes'])
        except (KeyError, TypeError) as err:
            raise ValueError('malformed way {!r}: {}'.format(raw, err))
        try:
            way_nodes = [by_id[int(node_id)] for node_id in node_ids]
        except KeyError as err:
            raise ValueError('way {} refers to unknown node {}'
                             .format(way_id, err.args[0]))
        ways.append(ProcessedWay(way_id, way_nodes,
                                 _tags(raw, 'way {}'.format(way_id))))

    ways_by_id = {way.id: way for way in ways}
    relations = [_parse_relation(raw, ways_by_id)
                 for raw in _section(document, 'relations')]

    logger.debug('Parsed %d nodes, %d ways and %d relations', len(nodes),
                 len(ways), len(relations))
    return Elements(nodes, ways, relations)


def _parse_relation(raw, ways_by_id):
    try:
        relation_id = int(raw['id'])
        raw_members = list(raw.get('members', []))
        roles_ids = [(str(m.get('role', '')), int(m['way']))
                     for m in raw_members]
    except (AttributeError, KeyError, TypeError) as err:
        raise ValueError('malformed relation {!r}: {}'.format(raw, err))
    members = []
    for role, way_id in roles_ids:
        if role not in MEMBER_ROLES:
            continue
        if way_id not in ways_by_id:
            raise ValueError('relation {} refers to unknown way {}'
                             .format(relation_id, way_id))
        members.append(ProcessedMember(role, ways_by_id[way_id]))
    return ProcessedRelation(relation_id, members,
                             _tags(raw, 'relation {}'.format(relation_id)))


def load_elements(elementsf):
    """Read nodes, ways and relations from a JSON file object.

    Return an Elements tuple. Raise ValueError for invalid input.
    """
    try:
        document = json.load(elementsf)
    except json.JSONDecodeError as err:
        raise ValueError('invalid elements JSON: {}'.format(err))
    return parse_elements(document)
