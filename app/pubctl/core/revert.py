"""Reverting published releases and documentation.

A revert deletes a release (or only its documentation) within the grace
period the registry allows after publication. A failed revert is reported
but never raised, so a combined package and docs revert always attempts
both deletions. An unreachable registry counts as a failed revert.
"""

import logging

from pubctl.api.client import RegistryClient
from pubctl.core.errors import RegistryConnectionError
from pubctl.core.outcome import Failure, Outcome, as_failure, classify
from pubctl.core.version import clean_version
from pubctl.models.package import PackageMetadata
from pubctl.utils.formatting import print_error, print_error_result, print_success

logger = logging.getLogger(__name__)


def report_failure(message: str, failure: Failure) -> Failure:
    """Print a failed registry call and return its outcome.

    Args:
        message: Headline describing the failed operation.
        failure: Failed outcome carrying the status code and body.

    Returns:
        The failure, unchanged.
    """
    print_error(message)
    print_error_result(failure.code, failure.body)
    return failure


def connection_failure(error: RegistryConnectionError) -> Failure:
    """Turn an unreachable registry into a failed outcome."""
    logger.debug("Registry unreachable: %s", error)
    return Failure(None, str(error))


def revert_package(client: RegistryClient, meta: PackageMetadata, version: str) -> Outcome:
    """Delete a published release.

    Args:
        client: Registry client.
        meta: Metadata of the package to revert.
        version: Version to revert, normalized before use.

    Returns:
        Outcome of the deletion.

    Raises:
        InvalidVersionError: If the version is not valid SemVer.
    """
    version = clean_version(version)
    failed = f"Reverting {meta.name} {version} failed"

    try:
        response = client.delete_release(meta.name, version)
    except RegistryConnectionError as e:
        return report_failure(failed, connection_failure(e))

    outcome = as_failure(classify(response.status_code, response.body), response.body)
    if isinstance(outcome, Failure):
        logger.debug("Reverting %s %s returned %d", meta.name, version, response.status_code)
        return report_failure(failed, outcome)

    print_success(f"Reverted {meta.name} {version}")
    return outcome


def revert_docs(client: RegistryClient, meta: PackageMetadata, version: str) -> Outcome:
    """Delete the documentation of a published release.

    Args:
        client: Registry client.
        meta: Metadata of the package to revert.
        version: Version whose documentation is reverted, normalized before use.

    Returns:
        Outcome of the deletion.

    Raises:
        InvalidVersionError: If the version is not valid SemVer.
    """
    version = clean_version(version)
    failed = f"Reverting docs for {meta.name} {version} failed"

    try:
        response = client.delete_docs(meta.name, version)
    except RegistryConnectionError as e:
        return report_failure(failed, connection_failure(e))

    outcome = as_failure(classify(response.status_code, response.body), response.body)
    if isinstance(outcome, Failure):
        logger.debug("Reverting docs %s %s returned %d", meta.name, version, response.status_code)
        return report_failure(failed, outcome)

    print_success(f"Reverted docs for {meta.name} {version}")
    return outcome
