"""Manual remediation instructions for the operator."""

from .models import CertificateBundle
from .platforms import PlatformCapabilities, PlatformKind

MKCERT_URL = "https://github.com/FiloSottile/mkcert"


def mkcert_install_guidance(capabilities: PlatformCapabilities) -> list[str]:
    """How to install mkcert by hand after automatic installation failed."""
    lines = ["Failed to install mkcert. Please install it manually and try again."]
    if capabilities.package_managers:
        lines.append(f"Please install mkcert manually on {capabilities.kind.value}:")
        lines += [f"  - {m.name}: {m.install_hint}" for m in capabilities.package_managers]
    elif capabilities.kind is PlatformKind.LINUX:
        lines.append(
            "Please install mkcert using your distribution's package manager "
            "(e.g., sudo apt install mkcert) or from GitHub."
        )
    lines.append(f"Instructions: {MKCERT_URL}")
    return lines


def openssl_missing_guidance() -> list[str]:
    """Where to get openssl; the manual path never installs it."""
    return [
        "OpenSSL is not found on your system. Please install OpenSSL manually and try again.",
        "You can find instructions for your OS online (e.g., Homebrew for macOS, "
        "apt for Debian/Ubuntu, Scoop/Chocolatey for Windows).",
    ]


def _macos_keychain_steps(bundle: CertificateBundle, password: str) -> list[str]:
    return [
        "For macOS:",
        f"  1. Double-click the generated '{bundle.bundle_path.name}' file.",
        "  2. Keychain Access will open. Select 'login' or 'System' keychain.",
        f"  3. Enter the password '{password}' when prompted.",
        "  4. Find the certificate, double-click it, expand 'Trust', and set "
        "'When using this certificate:' to 'Always Trust'.",
    ]


def _windows_import_steps(bundle: CertificateBundle, password: str) -> list[str]:
    return [
        "  1. Open 'Manage Computer Certificates' (certlm.msc).",
        "  2. Navigate to 'Personal' -> 'Certificates'.",
        "  3. Right-click 'Certificates' -> All Tasks -> Import...",
        f"  4. Browse to '{bundle.bundle_path.resolve()}', select it, and follow the wizard.",
        f"     (Password for this PFX is '{password}')",
    ]


def manual_trust_guidance(
    capabilities: PlatformCapabilities, bundle: CertificateBundle, password: str
) -> list[str]:
    """Trust steps for a self-signed openssl certificate."""
    lines = [
        "*** IMPORTANT: Manual Trust Step Required for OpenSSL Certificates ***",
        "Unlike mkcert, OpenSSL self-signed certificates require manual trust setup "
        "for browsers/OS.",
    ]
    key, cert = bundle.key_path.name, bundle.cert_path.name

    if capabilities.kind is PlatformKind.WINDOWS:
        lines.append("For Windows (IIS/ASP.NET Core):")
        lines += _windows_import_steps(bundle, password)
        lines += [
            "  5. After importing to Personal, you MUST also copy this certificate to "
            "'Trusted Root Certification Authorities' -> 'Certificates'.",
            "     - Drag and drop the certificate from 'Personal' to "
            "'Trusted Root Certification Authorities'.",
            "  6. For IIS, you can then bind this certificate to your website. "
            "IIS binding is not automated for OpenSSL certificates.",
        ]
    elif capabilities.kind is PlatformKind.MACOS:
        lines += _macos_keychain_steps(bundle, password)
        lines.append(
            f"  5. If using a web server like Nginx or Apache, configure it to use "
            f"'{key}' and '{cert}'."
        )
    elif capabilities.kind is PlatformKind.LINUX:
        lines += [
            "For Linux:",
            f"  You'll typically need to add '{cert}' to your system's trusted certificate store.",
            f"  - Copy '{cert}' to '/usr/local/share/ca-certificates/' (Debian/Ubuntu) "
            "or '/etc/pki/ca-trust/source/anchors/' (Fedora/RHEL).",
            "  - Run 'sudo update-ca-certificates' (Debian/Ubuntu) or "
            "'sudo update-ca-trust extract' (Fedora/RHEL).",
            "  - For browsers like Firefox, you might need to import it through browser settings.",
            f"  - For web servers (Nginx, Apache), configure them to use '{key}' and '{cert}'.",
        ]
    return lines


def mkcert_next_steps(
    capabilities: PlatformCapabilities, bundle: CertificateBundle, password: str
) -> list[str]:
    """Follow-up steps on platforms without automated IIS binding."""
    lines = ["Next Steps (Manual Import Required for your OS/Web Server):"]
    if capabilities.kind is PlatformKind.MACOS:
        lines += _macos_keychain_steps(bundle, password)
        lines.append(
            "  5. If using a web server like Nginx or Apache, you'll need to configure "
            "it to use the generated certificate and key."
        )
    elif capabilities.kind is PlatformKind.LINUX:
        lines += [
            "For Linux:",
            "  mkcert usually handles trust for common browsers (Firefox, Chrome) "
            "automatically via the system trust store.",
            f"  You can use the generated '{bundle.bundle_path.name}' with your web server "
            "(e.g., Nginx, Apache).",
            "  If browsers still distrust it, import the mkcert CA (see 'mkcert -CAROOT') "
            "into the browser or system trust store.",
        ]
    return lines


def iis_manual_binding_guidance(bundle: CertificateBundle, password: str) -> list[str]:
    """Fallback after the automated IIS binding failed."""
    lines = ["Failed to automatically configure IIS. You may need to do this manually."]
    lines += _windows_import_steps(bundle, password)
    lines.append(
        "  5. For IIS, open IIS Manager, select your site, then 'Bindings...', "
        "add/edit HTTPS binding, and select the imported certificate."
    )
    lines += iis_troubleshooting_guidance()
    return lines


def iis_troubleshooting_guidance() -> list[str]:
    """Hint for the most common cause of a failed IIS binding script."""
    return [
        "If the IISAdministration PowerShell module is missing, install it with:",
        "  Install-Module IISAdministration -Scope AllUsers",
    ]


def restart_reminder() -> list[str]:
    """Closing line of every successful run."""
    return ["Remember to restart your browser or web server for changes to take effect."]
