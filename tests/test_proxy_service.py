"""
Tests for proxy add/edit/delete on documents.
"""

import pytest

from frpulse.errors import (
    DuplicateNameError,
    InvalidPortError,
    InvalidProxyError,
    NotFoundError,
)
from frpulse.models.document import Document
from frpulse.models.proxy import DEFAULT_LOCAL_ADDRESS, ProtocolType, ProxyEntry
from frpulse.schemas.operations import AddProxy, DeleteProxy, EditProxy
from frpulse.schemas.proxy import ProxyChanges, ProxyCreate
from frpulse.services.proxy_service import (
    add_proxy,
    apply_operation,
    delete_proxy,
    edit_proxy,
    next_proxy_name,
    validate_entry,
)


@pytest.fixture
def document():
    """The document from the two-proxy scenario, before any change."""
    return Document(
        common={"server_addr": '"1.2.3.4"', "server_port": "7000"},
        proxies=[
            ProxyEntry(
                name="tcp_myclient_1",
                protocol_type=ProtocolType.TCP,
                local_address=DEFAULT_LOCAL_ADDRESS,
                local_port=8080,
                remote_port=80,
            ),
        ],
    )


@pytest.fixture
def http_entry():
    return ProxyEntry(
        name="http_myclient_2",
        protocol_type=ProtocolType.HTTP,
        local_port=8081,
        remote_port=8081,
        custom_domains=["a.example.com"],
    )


class TestAddProxy:
    """Tests for add_proxy."""

    def test_appends_and_keeps_common(self, document, http_entry):
        """Adding yields proxies ++ [entry] with the common block unchanged."""
        updated = add_proxy(document, http_entry)
        assert updated.proxies == document.proxies + [http_entry]
        assert updated.common == document.common

    def test_input_not_mutated(self, document, http_entry):
        """The original document is left alone."""
        before = document.model_copy(deep=True)
        add_proxy(document, http_entry)
        assert document == before

    def test_scenario(self, document, http_entry):
        """Add an http proxy, then delete the tcp one."""
        updated = add_proxy(document, http_entry)
        assert len(updated.proxies) == 2
        assert updated.proxies[1].local_address is None

        final = delete_proxy(updated, "tcp_myclient_1")
        assert final.proxy_names() == ["http_myclient_2"]
        assert final.common == {"server_addr": '"1.2.3.4"', "server_port": "7000"}

    def test_add_then_delete_is_identity(self, document, http_entry):
        """delete(add(D, E), E.name) == D."""
        assert delete_proxy(add_proxy(document, http_entry), http_entry.name) == document

    def test_duplicate_name(self, document):
        """Adding an existing name fails."""
        entry = ProxyEntry(name="tcp_myclient_1", local_address="127.0.0.1", local_port=1, remote_port=2)
        with pytest.raises(DuplicateNameError) as exc_info:
            add_proxy(document, entry)
        assert exc_info.value.kind == "duplicate_name"

    @pytest.mark.parametrize("local_port,remote_port", [(0, 80), (80, 65536), (-1, 80)])
    def test_invalid_ports(self, document, local_port, remote_port):
        """Ports outside 1-65535 fail with InvalidPortError."""
        entry = ProxyEntry(
            name="tcp_myclient_2",
            local_address="127.0.0.1",
            local_port=local_port,
            remote_port=remote_port,
        )
        with pytest.raises(InvalidPortError):
            add_proxy(document, entry)

    def test_boundary_ports(self, document):
        """Ports 1 and 65535 are accepted."""
        entry = ProxyEntry(name="edge", local_address="127.0.0.1", local_port=1, remote_port=65535)
        assert add_proxy(document, entry).proxies[-1].remote_port == 65535

    def test_tcp_gets_default_local_address(self, document):
        """A tcp entry without a local address gets loopback."""
        entry = ProxyEntry(name="udp_myclient_2", protocol_type=ProtocolType.UDP, local_port=53, remote_port=53)
        assert add_proxy(document, entry).proxies[-1].local_address == DEFAULT_LOCAL_ADDRESS

    def test_http_with_local_address_rejected(self, document):
        """http entries cannot have a local address."""
        entry = ProxyEntry(
            name="web",
            protocol_type=ProtocolType.HTTP,
            local_address="127.0.0.1",
            local_port=80,
            remote_port=80,
        )
        with pytest.raises(InvalidProxyError):
            add_proxy(document, entry)

    def test_tcp_with_domains_rejected(self, document):
        """tcp entries cannot have custom domains."""
        entry = ProxyEntry(name="ssh", local_port=22, remote_port=2222, custom_domains=["a.example.com"])
        with pytest.raises(InvalidProxyError):
            add_proxy(document, entry)

    def test_common_name_rejected(self, document):
        """The common block's name cannot be used by a proxy."""
        entry = ProxyEntry(name="common", local_address="127.0.0.1", local_port=22, remote_port=2222)
        with pytest.raises(InvalidProxyError):
            add_proxy(document, entry)

    def test_invalid_name_rejected(self, document):
        """Names must be usable as section headers."""
        entry = ProxyEntry(name="bad.name", local_port=22, remote_port=2222)
        with pytest.raises(InvalidProxyError):
            add_proxy(document, entry)

    def test_domains_cleaned(self, document):
        """Blank and repeated domains are dropped."""
        entry = ProxyEntry(
            name="web",
            protocol_type=ProtocolType.HTTPS,
            local_port=443,
            remote_port=443,
            custom_domains=["a.example.com", "", "a.example.com", "b.example.com"],
        )
        assert add_proxy(document, entry).proxies[-1].custom_domains == ["a.example.com", "b.example.com"]


class TestEditProxy:
    """Tests for edit_proxy."""

    def test_change_ports(self, document):
        """Port changes are applied in place."""
        updated = edit_proxy(document, "tcp_myclient_1", ProxyChanges(local_port=9090, remote_port=90))
        proxy = updated.proxies[0]
        assert (proxy.local_port, proxy.remote_port) == (9090, 90)
        assert proxy.name == "tcp_myclient_1"
        assert document.proxies[0].local_port == 8080

    def test_http_to_tcp_normalizes(self, document, http_entry):
        """Switching http -> tcp clears domains and sets loopback."""
        doc = add_proxy(document, http_entry)
        updated = edit_proxy(doc, "http_myclient_2", ProxyChanges(protocol_type=ProtocolType.TCP))
        proxy = updated.get_proxy("http_myclient_2")
        assert proxy.protocol_type == ProtocolType.TCP
        assert proxy.custom_domains == []
        assert proxy.local_address == DEFAULT_LOCAL_ADDRESS

    def test_tcp_to_https_drops_local_address(self, document):
        """Switching tcp -> https removes the local address."""
        updated = edit_proxy(
            document,
            "tcp_myclient_1",
            ProxyChanges(protocol_type=ProtocolType.HTTPS, custom_domains=["a.example.com"]),
        )
        proxy = updated.proxies[0]
        assert proxy.local_address is None
        assert proxy.custom_domains == ["a.example.com"]

    def test_explicit_domains_on_tcp_rejected(self, document):
        """Explicitly giving a tcp proxy domains is an error."""
        with pytest.raises(InvalidProxyError):
            edit_proxy(document, "tcp_myclient_1", ProxyChanges(custom_domains=["a.example.com"]))

    def test_clear_domains(self, document, http_entry):
        """An empty list clears custom domains."""
        doc = add_proxy(document, http_entry)
        updated = edit_proxy(doc, "http_myclient_2", ProxyChanges(custom_domains=[]))
        assert updated.get_proxy("http_myclient_2").custom_domains == []

    def test_invalid_port(self, document):
        """Edits are re-validated."""
        with pytest.raises(InvalidPortError):
            edit_proxy(document, "tcp_myclient_1", ProxyChanges(remote_port=70000))

    def test_not_found(self, document):
        """Editing a missing proxy fails."""
        with pytest.raises(NotFoundError):
            edit_proxy(document, "missing", ProxyChanges(local_port=1))

    def test_common_untouched(self, document):
        """Edits never touch the common block."""
        updated = edit_proxy(document, "tcp_myclient_1", ProxyChanges(protocol_type=ProtocolType.UDP))
        assert updated.common == document.common

    def test_extra_preserved(self, document):
        """Pass-through keys survive edits."""
        document.proxies[0].extra["use_compression"] = "true"
        updated = edit_proxy(document, "tcp_myclient_1", ProxyChanges(local_port=1))
        assert updated.proxies[0].extra == {"use_compression": "true"}


class TestDeleteProxy:
    """Tests for delete_proxy."""

    def test_keeps_order_and_names(self, document):
        """Remaining proxies keep their names and order."""
        doc = document
        for n in (2, 3, 4):
            doc = add_proxy(doc, ProxyEntry(name=f"tcp_myclient_{n}", local_port=n, remote_port=n))
        updated = delete_proxy(doc, "tcp_myclient_2")
        assert updated.proxy_names() == ["tcp_myclient_1", "tcp_myclient_3", "tcp_myclient_4"]

    def test_not_found(self, document):
        """Deleting a missing proxy fails."""
        with pytest.raises(NotFoundError) as exc_info:
            delete_proxy(document, "missing")
        assert exc_info.value.kind == "not_found"

    def test_first_duplicate_removed(self, document):
        """With duplicate names from a hand edit, the first match is removed."""
        dup = document.proxies[0].model_copy(update={"local_port": 9999})
        doc = Document(common=document.common, proxies=[document.proxies[0], dup])
        updated = delete_proxy(doc, "tcp_myclient_1")
        assert [p.local_port for p in updated.proxies] == [9999]


class TestNaming:
    """Tests for default proxy names."""

    def test_next_name_uses_count(self, document):
        """The sequence is the current count plus one."""
        assert next_proxy_name(document, ProtocolType.HTTP, "myclient") == "http_myclient_2"

    def test_next_name_skips_taken(self, document):
        """A taken name bumps the sequence."""
        doc = add_proxy(document, ProxyEntry(name="tcp_myclient_3", local_port=1, remote_port=1))
        doc = delete_proxy(doc, "tcp_myclient_1")
        assert doc.proxy_names() == ["tcp_myclient_3"]
        assert next_proxy_name(doc, ProtocolType.TCP, "myclient") == "tcp_myclient_2"
        doc = add_proxy(doc, ProxyEntry(name="tcp_myclient_2", local_port=2, remote_port=2))
        assert next_proxy_name(doc, ProtocolType.TCP, "myclient") == "tcp_myclient_4"


class TestApplyOperation:
    """Tests for operation dispatch."""

    def test_add_generates_name(self, document):
        """An add without a name uses the client's naming scheme."""
        operation = AddProxy(
            proxy=ProxyCreate(protocol_type=ProtocolType.UDP, local_port=53, remote_port=53),
            client_name="myclient",
        )
        updated = apply_operation(document, operation)
        assert updated.proxies[-1].name == "udp_myclient_2"
        assert updated.proxies[-1].local_address == DEFAULT_LOCAL_ADDRESS

    def test_add_without_any_name(self, document):
        """Either a proxy name or a client name is needed."""
        operation = AddProxy(proxy=ProxyCreate(local_port=1, remote_port=1))
        with pytest.raises(InvalidProxyError):
            apply_operation(document, operation)

    def test_edit_and_delete(self, document):
        """Edit and delete operations dispatch to their functions."""
        edited = apply_operation(document, EditProxy(name="tcp_myclient_1", changes=ProxyChanges(remote_port=81)))
        assert edited.proxies[0].remote_port == 81
        assert apply_operation(edited, DeleteProxy(name="tcp_myclient_1")).proxies == []


class TestValidateEntry:
    """Tests for validate_entry."""

    def test_tcp_without_address(self):
        """Parsed tcp entries without an address are inconsistent."""
        with pytest.raises(InvalidProxyError):
            validate_entry(ProxyEntry(name="p", local_port=1, remote_port=1))

    def test_valid(self):
        validate_entry(ProxyEntry(name="p", local_address="10.0.0.2", local_port=1, remote_port=1))
