"""Example: Calling a legacy calculator service with Simple SOAP Client.

This example demonstrates how to:
1. Register XML schemas for typed request and response bodies
2. Build an envelope with Action, To and WS-Security username token headers
3. Serialize and inspect the request envelope
4. Send the request and handle a SOAP fault
"""

from dataclasses import dataclass

from simple_soap import (
    Envelope,
    FaultError,
    XmlField,
    XmlSchema,
    action,
    register_schema,
    set_body_value,
    to,
    username_token_and_password_text,
    with_header_values,
)
from simple_soap.transport import SoapClient
from simple_soap.utils.exceptions import TransportError
from simple_soap.xml import envelope_to_xml

SERVICE_URL = "http://localhost:8080/Calculator.svc"
ADD_ACTION = "http://tempuri.org/ICalculator/Add"
CALC_NS = "http://tempuri.org/"


@dataclass
class Add:
    a: int
    b: int


@dataclass
class AddResponse:
    result: int


register_schema(
    Add,
    XmlSchema(
        name="Add",
        namespace=CALC_NS,
        fields=(
            XmlField("a", "a", CALC_NS, type=int),
            XmlField("b", "b", CALC_NS, type=int),
        ),
    ),
)
register_schema(
    AddResponse,
    XmlSchema(
        name="AddResponse",
        namespace=CALC_NS,
        fields=(XmlField("result", "AddResult", CALC_NS, type=int),),
    ),
)


def example_build_envelope():
    """Example 1: Build and print a request envelope."""
    print("=" * 80)
    print("Example 1: Request Envelope Construction")
    print("=" * 80)

    envelope = set_body_value(Envelope(), Add(a=2, b=3))
    with_header_values(
        envelope,
        action(ADD_ACTION),
        to(SERVICE_URL),
        username_token_and_password_text("alice", "secret"),
    )
    print(f"✓ Built envelope with {len(envelope.header.headers)} headers")

    print(envelope_to_xml(envelope, pretty_print=True).decode("utf-8"))
    return envelope


def example_call_service():
    """Example 2: Call the service and handle faults."""
    print("=" * 80)
    print("Example 2: Service Call")
    print("=" * 80)

    with SoapClient() as client:
        try:
            response = client.call(
                SERVICE_URL,
                ADD_ACTION,
                Add(a=2, b=3),
                response_type=AddResponse,
                headers=[
                    action(ADD_ACTION),
                    username_token_and_password_text("alice", "secret"),
                ],
            )
            print(f"✓ 2 + 3 = {response.result}")
        except FaultError as e:
            print(f"✗ Service fault {e.code}: {e.string}")
        except TransportError as e:
            print(f"✗ Service not reachable: {e}")


if __name__ == "__main__":
    example_build_envelope()
    example_call_service()
