"""
Email service for QuickCourt Backend
Sends unhandled-error reports over SMTP when ENABLE_ERROR_EMAILS is set
"""

import os
import smtplib
import logging
import traceback
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from datetime import datetime

logger = logging.getLogger(__name__)


class EmailService:
    """Service for sending error reports via SMTP"""

    def __init__(self):
        self.enabled = os.getenv("ENABLE_ERROR_EMAILS", "false").lower() in {
            "1",
            "true",
            "yes",
        }
        self.smtp_host = os.getenv("SMTP_HOST")
        self.smtp_port = int(os.getenv("SMTP_PORT", "587"))
        self.smtp_user = os.getenv("SMTP_USER")
        self.smtp_pass = os.getenv("SMTP_PASS")
        self.smtp_use_tls = os.getenv("SMTP_USE_TLS", "true").lower() in {
            "1",
            "true",
            "yes",
        }
        self.from_addr = os.getenv("ERROR_FROM", "errors@quickcourt.local")
        self.to_addrs = [
            addr.strip()
            for addr in os.getenv("ERROR_TO", "").split(",")
            if addr.strip()
        ]

    def is_configured(self) -> bool:
        """Check if email service is properly configured"""
        return bool(
            self.smtp_host and self.smtp_user and self.smtp_pass and self.to_addrs
        )

    def send_error_email(self, error_data: dict) -> bool:
        """
        Send error notification email

        Args:
            error_data: Dictionary containing error information
                - path: Request path
                - method: HTTP method
                - client: Client IP
                - exception: Exception object
                - timestamp: Error timestamp
        """
        if not self.is_configured():
            logger.warning("Email service not configured, skipping error email")
            return False

        try:
            msg = MIMEMultipart("alternative")
            msg["Subject"] = (
                f"[QuickCourt Backend][{os.getenv('ENV', 'development')}] ERROR"
            )
            msg["From"] = self.from_addr
            msg["To"] = ", ".join(self.to_addrs)
            msg.attach(MIMEText(self._generate_error_html(error_data), "html", "utf-8"))

            server = smtplib.SMTP(self.smtp_host, self.smtp_port)
            if self.smtp_use_tls:
                server.starttls()
            server.login(self.smtp_user, self.smtp_pass)
            server.send_message(msg)
            server.quit()

            logger.info(f"Error email sent successfully to {', '.join(self.to_addrs)}")
            return True

        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send error email: {e}")
            return False

    def _generate_error_html(self, error_data: dict) -> str:
        path = error_data.get("path", "Unknown")
        method = error_data.get("method", "Unknown")
        client = error_data.get("client", "Unknown")
        exception = error_data.get("exception")
        timestamp = error_data.get(
            "timestamp", datetime.utcnow().strftime("%Y-%m-%d %H:%M:%S")
        )

        if exception is not None:
            tb_lines = traceback.format_exception(
                type(exception), exception, exception.__traceback__
            )
            traceback_html = "".join(
                f'<div class="line">{line.strip()}</div>'
                for line in tb_lines
                if line.strip()
            )
        else:
            traceback_html = '<div class="line">No traceback available</div>'

        return f"""
        <!DOCTYPE html>
        <html>
        <head>
            <meta charset="UTF-8">
            <style>
                body {{ font-family: -apple-system, 'Segoe UI', Roboto, sans-serif; padding: 20px; }}
                .info-label {{ font-weight: 600; color: #495057; font-size: 12px; text-transform: uppercase; }}
                .traceback {{ background: #1e1e1e; color: #d4d4d4; padding: 20px; font-family: monospace; font-size: 12px; }}
            </style>
        </head>
        <body>
            <h1>Error Report</h1>
            <div>QuickCourt Backend | {os.getenv('ENV', 'development').upper()}</div>
            <p>{timestamp} UTC</p>
            <div class="info-label">Endpoint</div><div>{method} {path}</div>
            <div class="info-label">Client IP</div><div>{client}</div>
            <h3>Stack Trace</h3>
            <div class="traceback">{traceback_html}</div>
        </body>
        </html>
        """


# Global email service instance
email_service = EmailService()
