"""The ``package`` resource: configuration, assembly and the generate command."""
