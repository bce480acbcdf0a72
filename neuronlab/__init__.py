"""NeuronLab - interactive single artificial neuron simulator"""

__version__ = '0.1.0'
