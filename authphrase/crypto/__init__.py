"""authphrase.crypto -- cryptographic primitives used by the recognizers"""
