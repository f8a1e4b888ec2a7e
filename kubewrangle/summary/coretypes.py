"""Summarizers for core workload and cattle object types."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from kubewrangle.summary.model import (
    Condition,
    Relationship,
    Summary,
    is_kind,
    nested_map,
    nested_slice,
    nested_string,
)


def _uses(name: str, kind: str) -> Relationship:
    return Relationship(name=name, kind=kind, api_version="v1", type="uses")


def _selects_pods(obj: Any) -> bool:
    return (
        is_kind(obj, "ReplicaSet", "apps/", "extension/")
        or is_kind(obj, "DaemonSet", "apps/", "extension/")
        or is_kind(obj, "StatefulSet", "apps/", "extension/")
        or is_kind(obj, "Deployment", "apps/", "extension/")
        or is_kind(obj, "Job", "batch/")
        or is_kind(obj, "Service")
    )


def check_has_pod_template(obj: dict, conditions: list[Condition], summary: Summary) -> Summary:
    template = nested_map(obj, "spec", "template")
    if template is None or not _selects_pods(obj):
        return summary
    return check_pod_template(template, conditions, summary)


def _label_selector(selector: Mapping) -> Optional[dict]:
    result: dict = {}
    labels = selector.get("matchLabels")
    if labels is not None:
        if not isinstance(labels, Mapping) or not all(
            isinstance(v, str) for v in labels.values()
        ):
            return None
        result["matchLabels"] = dict(labels)
    expressions = selector.get("matchExpressions")
    if expressions is not None:
        if not isinstance(expressions, list):
            return None
        parsed = []
        for expression in expressions:
            if not isinstance(expression, Mapping):
                return None
            key = expression.get("key", "")
            operator = expression.get("operator", "")
            values = expression.get("values")
            if not isinstance(key, str) or not isinstance(operator, str):
                return None
            if values is not None and (
                not isinstance(values, list) or not all(isinstance(v, str) for v in values)
            ):
                return None
            item = {"key": key, "operator": operator}
            if values:
                item["values"] = list(values)
            parsed.append(item)
        result["matchExpressions"] = parsed
    return result


def check_has_pod_selector(obj: dict, conditions: list[Condition], summary: Summary) -> Summary:
    selector = nested_map(obj, "spec", "selector")
    if selector is None or not _selects_pods(obj):
        return summary

    if "matchLabels" in selector or "matchExpressions" in selector:
        sel = _label_selector(selector)
        if sel is None:
            return summary
    else:
        sel = {"matchLabels": {key: nested_string(selector, key) for key in selector}}

    relation = "selects" if obj.get("kind") == "Service" else "creates"
    summary.relationships.append(
        Relationship(kind="Pod", api_version="v1", type=relation, selector=sel)
    )
    return summary


def check_pod(obj: dict, conditions: list[Condition], summary: Summary) -> Summary:
    if not is_kind(obj, "Pod"):
        return summary
    if nested_string(obj, "kind") != "Pod" or nested_string(obj, "apiVersion") != "v1":
        return summary
    return check_pod_template(obj, conditions, summary)


def check_pod_template(obj: dict, conditions: list[Condition], summary: Summary) -> Summary:
    summary = _check_pod_config_maps(obj, summary)
    summary = _check_pod_secrets(obj, summary)
    summary = _check_pod_service_account(obj, summary)
    summary = _check_pod_projected_volume(obj, summary)
    summary = _check_pod_pull_secret(obj, summary)
    return summary


def _check_pod_pull_secret(obj: dict, summary: Summary) -> Summary:
    for pull_secret in nested_slice(obj, "imagePullSecrets"):
        name = nested_string(pull_secret, "name")
        if name:
            summary.relationships.append(_uses(name, "Secret"))
    return summary


def _check_pod_projected_volume(obj: dict, summary: Summary) -> Summary:
    for volume in nested_slice(obj, "spec", "volumes"):
        for source in nested_slice(volume, "projected", "sources"):
            secret_name = nested_string(source, "secret", "name")
            if secret_name:
                summary.relationships.append(_uses(secret_name, "Secret"))
            config_map = nested_string(source, "configMap", "name")
            if config_map:
                summary.relationships.append(_uses(config_map, "ConfigMap"))
    return summary


def _add_named(summary: Summary, names: set[str], name: str, kind: str) -> None:
    if not name or name in names:
        return
    names.add(name)
    summary.relationships.append(_uses(name, kind))


def _add_env_ref(
    summary: Summary, names: set[str], obj: dict, field_prefix: str, kind: str
) -> Summary:
    for container in nested_slice(obj, "spec", "containers"):
        for env in nested_slice(container, "envFrom"):
            _add_named(summary, names, nested_string(env, field_prefix + "Ref", "name"), kind)
        for env in nested_slice(container, "env"):
            name = nested_string(env, "valueFrom", field_prefix + "KeyRef", "name")
            _add_named(summary, names, name, kind)
    return summary


def _check_pod_config_maps(obj: dict, summary: Summary) -> Summary:
    names: set[str] = set()
    for volume in nested_slice(obj, "spec", "volumes"):
        _add_named(summary, names, nested_string(volume, "configMap", "name"), "ConfigMap")
    return _add_env_ref(summary, names, obj, "configMap", "ConfigMap")


def _check_pod_secrets(obj: dict, summary: Summary) -> Summary:
    names: set[str] = set()
    for volume in nested_slice(obj, "spec", "volumes"):
        _add_named(summary, names, nested_string(volume, "secret", "secretName"), "Secret")
    return _add_env_ref(summary, names, obj, "secret", "Secret")


def _check_pod_service_account(obj: dict, summary: Summary) -> Summary:
    name = nested_string(obj, "spec", "serviceAccountName")
    summary.relationships.append(_uses(name, "ServiceAccount"))
    return summary


def check_cattle_ready(obj: dict, conditions: list[Condition], summary: Summary) -> Summary:
    if "cattle.io/" in nested_string(obj, "apiVersion"):
        for condition in conditions:
            if (
                condition.type() == "Ready"
                and condition.status() == "False"
                and condition.message()
            ):
                summary.message.append(condition.message())
                summary.error = True
                return summary
    return summary


def check_cattle_types(obj: dict, conditions: list[Condition], summary: Summary) -> Summary:
    return _check_release(obj, summary)


def _check_release(obj: dict, summary: Summary) -> Summary:
    if not is_kind(obj, "App", "catalog.cattle.io"):
        return summary
    if nested_string(obj, "status", "summary", "state") != "deployed":
        return summary
    for resource in nested_slice(obj, "spec", "resources"):
        summary.relationships.append(
            Relationship(
                name=nested_string(resource, "name"),
                kind=nested_string(resource, "kind"),
                api_version=nested_string(resource, "apiVersion"),
                type="helmresource",
            )
        )
    return summary