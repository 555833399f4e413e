"""Built-in ``istiolib.telemetry`` library template.

Renders an Istio ``Telemetry`` resource. ``samplingPercentage`` defaults to
``10.0``; ``spec.selector.matchLabels`` is emitted only when the
``selector`` value is present and non-empty, with one label per selector
entry in declared order. The default never opens the selector gate.
"""

from __future__ import annotations

from chartharness.templates.models import DocumentDefinition, TemplateDefinition

TELEMETRY_TEMPLATE_NAME = "istiolib.telemetry"
DEFAULT_SAMPLING_PERCENTAGE = 10.0

TELEMETRY_SOURCE = """\
apiVersion: telemetry.istio.io/v1
kind: Telemetry
metadata:
  name: {{ release.name | tojson }}
  namespace: {{ release.namespace | tojson }}
spec:
{% if selector %}
  selector:
    matchLabels:
{% for key, value in (selector | expect("mapping", "selector")).items() %}
      {{ key | tojson }}: {{ value | tojson }}
{% endfor %}
{% endif %}
  tracing:
    - randomSamplingPercentage: {{ samplingPercentage
        | default(10.0)
        | expect("number", "samplingPercentage")
        | tojson }}
"""

TELEMETRY_DEFINITION = TemplateDefinition(
    name=TELEMETRY_TEMPLATE_NAME,
    description="Istio Telemetry resource with tracing sampling and selector",
    documents=(DocumentDefinition(source=TELEMETRY_SOURCE),),
)

BUILTIN_DEFINITIONS: tuple[TemplateDefinition, ...] = (TELEMETRY_DEFINITION,)
