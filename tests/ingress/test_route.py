import hashlib

import pytest

from knop.errors import IncorrectHTTPOptionAnnotation, NoValidLoadBalancerDomain, RouteError
from knop.ingress.models import (
    IngressDescriptor,
    IngressRule,
    IngressTLS,
    LoadBalancerIngress,
    LoadBalancerStatus,
)
from knop.ingress.route import (
    DISABLE_ROUTE_ANNOTATION,
    ENABLE_PASSTHROUGH_ANNOTATION,
    HTTP_OPTION_ANNOTATION,
    TIMEOUT_ANNOTATION,
    is_routable_host,
    make_routes,
    route_name,
    translate,
)
from knop.observers.dispatcher import EventBus
from knop.observers.events import RoutesComputed, RoutesFailed

LB_DOMAIN = "kourier.knative-serving-ingress.svc.cluster.local"


class Capture:
    def __init__(self): self.events = []
    def notify(self, ev): self.events.append(ev)


def _ingress(rules, *, annotations=None, tls=None, domains=(LB_DOMAIN,), labels=None) -> IngressDescriptor:
    return IngressDescriptor(
        name="hello",
        namespace="default",
        uid="abc",
        rules=rules,
        tls=tls or [],
        labels=labels or {},
        annotations=annotations or {},
        public_load_balancer=LoadBalancerStatus(
            ingress=[LoadBalancerIngress(domain_internal=d) for d in domains]
        ),
    )


def _hash6(host):
    return hashlib.sha256(host.encode()).hexdigest()[:6]


def test_redirect_scenario():
    ci = _ingress([IngressRule(hosts=["foo.default.example.com"], http_option="Redirected")])
    routes = make_routes(ci)
    assert len(routes) == 1
    r = routes[0]
    assert r.name == f"route-abc-{_hash6('foo.default.example.com')}"
    assert r.namespace == "knative-serving-ingress"
    assert r.service_name == "kourier"
    assert r.host == "foo.default.example.com"
    assert r.termination == "edge"
    assert r.insecure_edge_termination_policy == "Redirect"
    assert r.target_port == "http2"
    assert r.weight == 100
    assert r.wildcard_policy == "None"


def test_default_policy_allows_insecure():
    r = make_routes(_ingress([IngressRule(hosts=["foo.example.com"])]))[0]
    assert r.insecure_edge_termination_policy == "Allow"


@pytest.mark.parametrize("host,ok", [
    ("example.com", True),
    ("foo.example.com", True),
    ("foo.default.example.com", True),
    ("hello.default.svc.cluster.local", False),
    ("hello.default.svc", False),
    ("localhost", False),
])
def test_host_classification(host, ok):
    assert is_routable_host(host) is ok


def test_internal_hosts_and_cluster_local_rules_skipped():
    ci = _ingress([
        IngressRule(hosts=["hello.default", "hello.default.svc", "hello.default.svc.cluster.local",
                           "hello.default.example.com"]),
        IngressRule(hosts=["private.example.com"], visibility="ClusterLocal"),
    ])
    assert [r.host for r in make_routes(ci)] == ["hello.default", "hello.default.example.com"]


def test_route_name_deterministic():
    assert route_name("abc", "a.example.com") == route_name("abc", "a.example.com")
    assert route_name("abc", "a.example.com") != route_name("abc", "b.example.com")
    assert route_name("abc", "a.example.com") != route_name("xyz", "a.example.com")
    assert len(route_name("abc", "a.example.com")) == len("route-abc-") + 6


def test_annotations_merged_with_timeout():
    ci = _ingress([IngressRule(hosts=["foo.example.com"])], annotations={"a": "b", TIMEOUT_ANNOTATION: "5s"})
    r = make_routes(ci)[0]
    assert r.annotations == {"a": "b", TIMEOUT_ANNOTATION: "600s"}
    assert ci.annotations[TIMEOUT_ANNOTATION] == "5s"


def test_labels_identify_owner():
    ci = _ingress([IngressRule(hosts=["foo.example.com"])], labels={"team": "x"})
    r = make_routes(ci)[0]
    assert r.labels == {
        "team": "x",
        "networking.internal.knative.dev/ingress": "hello",
        "serving.knative.openshift.io/ingressName": "hello",
        "serving.knative.openshift.io/ingressNamespace": "default",
    }


def test_disable_route_annotation():
    ci = _ingress([IngressRule(hosts=["foo.example.com"])], annotations={DISABLE_ROUTE_ANNOTATION: ""})
    assert make_routes(ci) == []


def test_tls_forces_passthrough():
    ci = _ingress(
        [IngressRule(hosts=["foo.example.com"], http_option="Enabled")],
        tls=[IngressTLS(hosts=["foo.example.com"], secret_name="cert", secret_namespace="default")],
    )
    r = make_routes(ci)[0]
    assert r.termination == "passthrough"
    assert r.target_port == "https"
    assert r.insecure_edge_termination_policy == "Redirect"


def test_passthrough_annotation():
    ci = _ingress([IngressRule(hosts=["foo.example.com"])], annotations={ENABLE_PASSTHROUGH_ANNOTATION: "true"})
    r = make_routes(ci)[0]
    assert (r.termination, r.target_port, r.insecure_edge_termination_policy) == ("passthrough", "https", "Redirect")


@pytest.mark.parametrize("value,policy", [
    ("enabled", "Allow"),
    ("Enabled", "Allow"),
    ("redirected", "Redirect"),
    ("REDIRECTED", "Redirect"),
])
def test_legacy_http_option_annotation(value, policy):
    ci = _ingress([IngressRule(hosts=["foo.example.com"], http_option="Redirected" if policy == "Allow" else "Enabled")],
                  annotations={HTTP_OPTION_ANNOTATION: value})
    assert make_routes(ci)[0].insecure_edge_termination_policy == policy


def test_bad_http_option_annotation_aborts():
    ci = _ingress([IngressRule(hosts=["foo.example.com"])], annotations={HTTP_OPTION_ANNOTATION: "sometimes"})
    with pytest.raises(IncorrectHTTPOptionAnnotation) as exc:
        make_routes(ci)
    assert "sometimes" in str(exc.value)


def test_no_valid_lb_domain():
    for domains in ([], [""], ["kourier.knative-serving-ingress"], ["a.b.c.d"]):
        ci = _ingress([IngressRule(hosts=["foo.example.com"])], domains=domains)
        with pytest.raises(NoValidLoadBalancerDomain):
            make_routes(ci)


def test_first_valid_lb_domain_used():
    ci = _ingress([IngressRule(hosts=["foo.example.com"])],
                  domains=["", "bad", "first.ns1.svc.cluster.local", "second.ns2.svc.cluster.local"])
    r = make_routes(ci)[0]
    assert (r.service_name, r.namespace) == ("first", "ns1")


def test_no_routes_without_external_hosts_needs_no_lb():
    ci = _ingress([IngressRule(hosts=["hello.default.svc.cluster.local"])], domains=[])
    assert make_routes(ci) == []


def test_translate_emits_events():
    cap = Capture()
    ci = _ingress([IngressRule(hosts=["a.example.com", "b.example.com"])])
    routes = translate(ci, bus=EventBus([cap]), run_id="r1")
    assert len(routes) == 2
    ev = cap.events[-1]
    assert isinstance(ev, RoutesComputed)
    assert (ev.ingress, ev.count, ev.run_id) == ("default/hello", 2, "r1")


def test_translate_failure_emits_and_raises():
    cap = Capture()
    ci = _ingress([IngressRule(hosts=["a.example.com"])], domains=[])
    with pytest.raises(RouteError):
        translate(ci, bus=EventBus([cap]))
    assert isinstance(cap.events[-1], RoutesFailed)


def test_to_manifest_shape():
    r = make_routes(_ingress([IngressRule(hosts=["foo.example.com"])]))[0]
    m = r.to_manifest()
    assert m["kind"] == "Route"
    assert m["metadata"]["namespace"] == "knative-serving-ingress"
    assert m["spec"]["to"] == {"kind": "Service", "name": "kourier", "weight": 100}
    assert m["spec"]["port"] == {"targetPort": "http2"}
    assert m["spec"]["tls"] == {"termination": "edge", "insecureEdgeTerminationPolicy": "Allow"}
    assert m["spec"]["wildcardPolicy"] == "None"
