#!/usr/bin/env python3
"""NeuronLab Quick Start Example

Evaluates a neuron headlessly, then walks the same neuron through a few
viewport changes the way the dashboard does.
"""
from neuronlab.config import load_settings, get_config_path
from neuronlab.neuron import Input, NeuronSession, evaluate, list_activations


def main():
    print("=== NeuronLab Quick Start ===\n")

    # Load configuration
    print("1. Loading configuration...")
    settings = load_settings()
    source = get_config_path()
    print(f"   Config: {source}" + ("" if source.exists() else " (not found, using defaults)"))

    # Evaluate a neuron directly
    print("\n2. Evaluating a neuron:")
    inputs = [Input("1", value=1, weight=1), Input("2", value=2, weight=0.5)]
    result = evaluate(inputs, aggregation="Sum", bias=0.0, activation="Sigmoid", params={"gain": 1})
    print(f"   {result.formula}")
    print(f"   {result.output_formula}")
    print(f"   slope at point: {result.derivative:.3f}")

    # Same inputs through every activation
    print("\n3. Every activation at that aggregated value:")
    for name in list_activations():
        r = evaluate(inputs, aggregation="Sum", bias=0.0, activation=name)
        print(f"   {r.output_formula}")

    # Session with viewport
    print("\n4. Session with pan and zoom:")
    session = NeuronSession(settings=settings)
    session.update_input("1", "value", "3")
    session.select_activation("Tanh")
    session.zoom_in()
    session.pan(40, -20)
    snapshot = session.snapshot()
    x_min, x_max, y_min, y_max = snapshot.visible_bounds
    print(f"   zoom {snapshot.zoom:.0%}, visible x [{x_min:.2f}, {x_max:.2f}]")
    print(f"   {len(snapshot.samples)} curve samples, point at {snapshot.current_point}")

    print("\n5. Launch dashboard:")
    print("   Run: neuronlab")


if __name__ == "__main__":
    main()
