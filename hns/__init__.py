"""Hostname naming service package.

Generates template-based hostnames, tracks their reservation lifecycle and
verifies name usage against DNS.
"""

# Nothing is re-exported at the package level; import from the layer
# packages (``hns.application``, ``hns.infrastructure`` ...) directly.
