"""IIS HTTPS binding through an elevated PowerShell script (Windows only)."""

import base64
from pathlib import Path

from .command_runner import POWERSHELL, POWERSHELL_BASE_ARGS, CommandRunner, powershell_quote
from .logging_config import LOGGER
from .models import BindingTarget

CERT_STORE = r"Cert:\LocalMachine\My"
IIS_MODULE = "IISAdministration"

_SCRIPT_TEMPLATE = """\
$ErrorActionPreference = 'Stop'
try {{
    if (-not (Get-Module -ListAvailable -Name {module})) {{
        Write-Error '{module_name} PowerShell module is not installed. Install it (Install-Module {module_name}) and try again.'
        exit 1
    }}
    Import-Module {module}

    Write-Host 'Importing certificate into Personal store...'
    $password = ConvertTo-SecureString -String {password} -AsPlainText -Force
    Import-PfxCertificate -FilePath {pfx_path} -CertStoreLocation {store} -Password $password | Out-Null

    $cert = Get-ChildItem -Path {store} | Where-Object {{ $_.Subject -like {subject_pattern} }} | Select-Object -First 1
    if (-not $cert) {{
        Write-Error ('Could not find the imported certificate with CN=' + {hostname})
        exit 1
    }}
    $thumbprint = $cert.Thumbprint
    Write-Host ('Certificate thumbprint found: ' + $thumbprint)

    $bindingInfo = {binding_info}
    Write-Host 'Removing existing HTTPS binding if present...'
    Get-IISSiteBinding -Name {site} -Protocol https -ErrorAction SilentlyContinue |
        Where-Object {{ $_.BindingInformation -eq $bindingInfo }} |
        ForEach-Object {{ Remove-IISSiteBinding -Name {site} -BindingInformation $bindingInfo -Protocol https -Confirm:$false }}

    Write-Host 'Adding new HTTPS binding...'
    New-IISSiteBinding -Name {site} -BindingInformation $bindingInfo -Protocol https -CertificateThumbPrint $thumbprint -CertStoreLocation {store} -SslFlag 'None'
    Write-Host 'IIS binding configured successfully.'
    exit 0
}}
catch {{
    Write-Error $_.Exception.Message
    exit 1
}}
"""


def render_binding_script(bundle_path: Path, password: str, target: BindingTarget) -> str:
    """Render the import-and-rebind PowerShell script.

    The script removes a binding with the same ``*:port:hostname`` before
    adding one, so running it twice leaves a single binding.

    Args:
        bundle_path: Absolute path to the .pfx file
        password: Bundle password
        target: Site, port and hostname to bind

    Returns:
        PowerShell script text
    """
    return _SCRIPT_TEMPLATE.format(
        module=powershell_quote(IIS_MODULE),
        module_name=IIS_MODULE,
        password=powershell_quote(password),
        pfx_path=powershell_quote(str(bundle_path)),
        store=powershell_quote(CERT_STORE),
        subject_pattern=powershell_quote(f"*CN={target.hostname}*"),
        hostname=powershell_quote(target.hostname),
        binding_info=powershell_quote(target.binding_information),
        site=powershell_quote(target.site_name),
    )


def encode_script(script: str) -> str:
    """Encode a script for ``powershell -EncodedCommand`` (base64 of UTF-16LE)."""
    return base64.b64encode(script.encode("utf-16-le")).decode("ascii")


def configure_iis_binding(
    runner: CommandRunner,
    bundle_path: Path,
    password: str,
    target: BindingTarget,
) -> bool:
    """Import the bundle and bind it to the IIS site in one elevated call.

    Returns:
        True if the script exited zero; any failure inside it is reported
        as a single False
    """
    script = render_binding_script(bundle_path.resolve(), password, target)
    LOGGER.info("Executing PowerShell script for IIS configuration...")
    result = runner.run(
        POWERSHELL,
        [*POWERSHELL_BASE_ARGS, "-EncodedCommand", encode_script(script)],
        elevated=True,
    )
    if not result.succeeded:
        LOGGER.warning("IIS configuration script failed with exit code %d", result.exit_code)
    return result.succeeded
