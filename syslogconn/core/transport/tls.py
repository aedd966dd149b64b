"""
TLS client context construction for syslogconn.

PEM material arrives as in-memory strings. ``cryptography`` parses it up front
so malformed bundles and mismatched key pairs surface as ``TLSSetupError``
with a precise message, before any handshake is attempted.
"""

from __future__ import annotations

import os
import ssl
import tempfile

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from loguru import logger

from ...model import TLSConfig
from .interfaces import TLSSetupError


def load_ca_bundle(ca_pem: str) -> list[x509.Certificate]:
    """Parse a PEM CA bundle.

    Raises:
        TLSSetupError: If the bundle is malformed or holds no certificates
    """
    try:
        certificates = x509.load_pem_x509_certificates(ca_pem.encode())
    except ValueError as e:
        raise TLSSetupError(f"failed to parse CA certificate: {e}") from e
    if not certificates:
        raise TLSSetupError("failed to parse CA certificate: bundle is empty")
    return certificates


def check_key_pair(cert_pem: str, key_pem: str) -> None:
    """Verify that a PEM certificate and private key belong together.

    Raises:
        TLSSetupError: If either side fails to parse or the keys differ
    """
    try:
        certificate = x509.load_pem_x509_certificate(cert_pem.encode())
    except ValueError as e:
        raise TLSSetupError(f"failed to load client cert/key: {e}") from e

    try:
        private_key = serialization.load_pem_private_key(key_pem.encode(), None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise TLSSetupError(f"failed to load client cert/key: {e}") from e

    spki = serialization.PublicFormat.SubjectPublicKeyInfo
    cert_public = certificate.public_key().public_bytes(
        serialization.Encoding.DER, spki
    )
    key_public = private_key.public_key().public_bytes(
        serialization.Encoding.DER, spki
    )
    if cert_public != key_public:
        raise TLSSetupError(
            "failed to load client cert/key: private key does not match certificate"
        )


def _load_client_certificate(
    context: ssl.SSLContext, cert_pem: str, key_pem: str
) -> None:
    # ssl only loads certificate chains from files
    with tempfile.TemporaryDirectory(prefix="syslogconn-") as workdir:
        cert_path = os.path.join(workdir, "client.pem")
        key_path = os.path.join(workdir, "client.key")
        with open(cert_path, "w", encoding="ascii") as cert_file:
            cert_file.write(cert_pem)
        with open(
            os.open(key_path, os.O_WRONLY | os.O_CREAT, 0o600), "w", encoding="ascii"
        ) as key_file:
            key_file.write(key_pem)

        try:
            context.load_cert_chain(cert_path, key_path)
        except (ssl.SSLError, OSError) as e:
            raise TLSSetupError(f"failed to load client cert/key: {e}") from e


def create_client_context(options: TLSConfig) -> ssl.SSLContext:
    """Create an SSL client context from TLS options.

    The trust store is ``options.ca`` when given, else the platform
    defaults. A client certificate is loaded only when both ``client_cert``
    and ``client_key`` are present; supplying just one is an error.

    Raises:
        TLSSetupError: If any certificate material is unusable
    """
    if options.ca:
        load_ca_bundle(options.ca)
        try:
            context = ssl.create_default_context(cadata=options.ca)
        except ssl.SSLError as e:
            raise TLSSetupError(f"failed to parse CA certificate: {e}") from e
    else:
        context = ssl.create_default_context()

    if options.insecure_skip_verify:
        logger.warning("TLS certificate verification disabled by configuration")
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE

    if options.has_client_certificate:
        if not (options.client_cert and options.client_key):
            raise TLSSetupError(
                "client certificate and key must be supplied together"
            )
        check_key_pair(options.client_cert, options.client_key)
        _load_client_certificate(context, options.client_cert, options.client_key)

    return context
