"""Shared CLI plumbing: pipeline envelopes, argparse framework, output and YAML helpers."""
