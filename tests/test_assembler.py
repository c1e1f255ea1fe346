"""Tests for graph assembly."""

import pytest

from rmqgraph.core.bindings import Binding, resolve_bindings
from rmqgraph.core.entities import EntitySet, Exchange, Queue
from rmqgraph.core.errors import AssemblyError
from rmqgraph.core.ordering import apply_order
from rmqgraph.core.schema import BindingSchema
from rmqgraph.graph.assembler import GraphAssembler, assemble_graph, describe, style


@pytest.fixture
def entities():
    return EntitySet.from_dict({
        "queues": [
            {
                "name": "work",
                "vhost": "/",
                "arguments": {
                    "x-message-ttl": 60000,
                    "x-queue-type": "quorum",
                    "x-dead-letter-exchange": "dlx",
                    "x-overflow": "reject-publish",
                },
            },
            {"name": "jobs", "vhost": "tenant-a", "arguments": {}},
        ],
        "exchanges": [
            {"name": "in", "vhost": "/", "type": "direct"},
            {"name": "dlx", "vhost": "/", "type": "fanout", "internal": True},
            {"name": "in", "vhost": "tenant-a", "type": "topic"},
        ],
    })


@pytest.fixture
def document(entities):
    raw = [
        {"source": "in", "vhost": "/", "destination": "work", "destination_type": "queue", "routing_key": "rk"},
        {"source": "in", "vhost": "tenant-a", "destination": "jobs", "destination_type": "queue"},
    ]
    resolution = resolve_bindings(entities, [BindingSchema(**r) for r in raw])
    return assemble_graph(apply_order(entities), resolution.bindings)


class TestDescribe:
    """Tests for node labels."""

    def test_queue_label(self):
        """Queue labels list the interesting arguments in fixed order."""
        queue = Queue.from_dict({
            "name": "work",
            "vhost": "tenant-a",
            "arguments": {
                "x-max-length": 10,
                "x-max-priority": 5,
                "x-dead-letter-exchange": "dlx",
                "x-expires": 1000,
            },
        })

        title, details = describe(queue)

        assert title == "Q: tenant-a/work"
        assert details == ("x-max-priority: 5", "x-expires: 1000", "x-max-length: 10")

    def test_queue_without_arguments(self):
        title, details = describe(Queue.from_dict({"name": "q"}))

        assert title == "Q: q"
        assert details == ()

    def test_exchange_label(self):
        """Exchange labels show the type in uppercase."""
        title, details = describe(Exchange.from_dict({"name": "events", "type": "topic"}))

        assert title == "E: events"
        assert details == ("TOPIC",)

    def test_not_an_entity(self):
        with pytest.raises(TypeError):
            describe("orders")


class TestStyle:
    """Tests for node styles."""

    def test_queue_style(self):
        node_style = style(Queue.from_dict({"name": "q"}))

        assert node_style.shape == "box"
        assert node_style.style == "solid,filled"

    def test_external_exchange_style(self):
        node_style = style(Exchange.from_dict({"name": "x"}))

        assert node_style.shape == "box"
        assert node_style.style == "solid,rounded,filled"

    def test_internal_exchange_style(self):
        """Internal exchanges get a dashed outline."""
        node_style = style(Exchange.from_dict({"name": "x", "internal": True}))

        assert node_style.style == "dashed,rounded,filled"
        assert node_style.fillcolor != style(Queue.from_dict({"name": "q"})).fillcolor


class TestGraphAssembler:
    """Tests for GraphAssembler class."""

    def test_one_cluster_per_vhost(self, document):
        """Clusters are labeled with their vhost, in lexicographic order."""
        assert [c.label for c in document.clusters] == ["/", "tenant-a"]

    def test_nodes_follow_entity_order(self, document):
        """Nodes keep the presentation order of their entities."""
        titles = [n.title for n in document.cluster("/").nodes]

        assert titles == ["E: dlx", "E: in", "Q: work"]

    def test_every_node_in_exactly_one_cluster(self, document):
        handles = [n.handle for n in document.nodes()]

        assert len(handles) == 5
        assert len(set(handles)) == 5

    def test_edges_stay_in_cluster(self, document):
        """Edges only reference nodes of their own cluster."""
        for cluster in document.clusters:
            handles = {n.handle for n in cluster.nodes}
            for edge in cluster.edges:
                assert edge.tail in handles
                assert edge.head in handles

    def test_dead_letter_edge_is_red(self, document):
        """Synthesized dead-letter edges are colored; explicit ones are not."""
        edges = document.cluster("/").edges

        assert [(e.label, e.color) for e in edges] == [("rk", None), ("", "red")]

    def test_edge_without_routing_key(self, document):
        edge = document.cluster("tenant-a").edges[0]

        assert edge.label == ""
        assert edge.color is None

    def test_interleaved_vhosts_are_grouped(self):
        """Input interleaving vhosts still yields one contiguous cluster each."""
        exchanges = [Exchange.from_dict({"name": "in", "vhost": f"v{i}"}) for i in range(3)]
        queues = [Queue.from_dict({"name": "q", "vhost": f"v{i}"}) for i in range(3)]
        entities = [e for pair in zip(queues, exchanges) for e in pair]
        bindings = [Binding(source=x, destination=q, vhost=q.vhost) for x, q in zip(exchanges, queues)]

        document = GraphAssembler().assemble(iter(reversed(entities)), iter(bindings))

        assert [c.label for c in document.clusters] == ["v0", "v1", "v2"]
        for cluster in document.clusters:
            assert [n.title for n in cluster.nodes] == [f"E: {cluster.label}/in", f"Q: {cluster.label}/q"]
            assert [(e.tail, e.head) for e in cluster.edges] == [
                (cluster.nodes[0].handle, cluster.nodes[1].handle)
            ]

    def test_empty_input(self):
        """No entities and no bindings means no clusters."""
        document = GraphAssembler().assemble([], [])

        assert document.clusters == []

    def test_edge_before_node_rejected(self):
        """An edge needs both endpoints to already have handles."""
        exchange = Exchange.from_dict({"name": "x"})
        queue = Queue.from_dict({"name": "q"})
        binding = Binding(source=exchange, destination=queue, vhost="/")

        with pytest.raises(AssemblyError):
            GraphAssembler().assemble([exchange], [binding])

    def test_assembler_is_single_use(self, entities):
        assembler = GraphAssembler()
        assembler.assemble(apply_order(entities), [])

        with pytest.raises(AssemblyError):
            assembler.assemble(apply_order(entities), [])

    def test_handles_are_not_stored_on_entities(self, entities):
        """Handles live in the assembler, not on entities."""
        ordered = apply_order(entities)
        assembler = GraphAssembler()
        assembler.assemble(ordered, [])

        assert assembler.handle_for(ordered[0]) == "n0"
        assert not hasattr(ordered[0], "node")
        assert GraphAssembler().handle_for(ordered[0]) is None

    def test_idempotent(self, entities):
        """Identical input yields identical descriptors."""
        first = assemble_graph(apply_order(entities), resolve_bindings(entities, []).bindings)
        second = assemble_graph(apply_order(entities), resolve_bindings(entities, []).bindings)

        assert first == second
