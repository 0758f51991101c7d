"""
Google Chat Orchestrator - Runs a job file against the Google Chat API.

Steps:
1. Load the job file (resource, operation, per-item parameters)
2. Authenticate with Google OAuth
3. Execute every item through the ChatExecutor
4. Save output.json / run_results.json
"""

import os
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Any

from dotenv import load_dotenv

from .chat_client import GoogleChatClient
from .config import DEFAULT_SETTINGS, PROXY_ENV_VARS
from .executor import ChatExecutor
from .oauth import GoogleOAuthClient
from .output_manager import OutputManager
from .parameters import load_job


class ChatOrchestrator:
    """Orchestrates one Google Chat job run."""

    def __init__(self, env_file: str = "./.env"):
        env_path = Path(env_file)
        if env_path.exists():
            load_dotenv(env_path)
            print(f"Loaded configuration from: {env_file}")
        else:
            print(f"Warning: {env_file} not found, using defaults/environment")

        # Google Chat API configuration
        self.api_base_url = os.getenv("GOOGLE_CHAT_API_URL", DEFAULT_SETTINGS["API_BASE_URL"])
        self.request_timeout = int(
            os.getenv("REQUEST_TIMEOUT", str(DEFAULT_SETTINGS["REQUEST_TIMEOUT"]))
        )

        # Google OAuth configuration
        self.token_url = os.getenv("GOOGLE_OAUTH_TOKEN_URL", DEFAULT_SETTINGS["OAUTH_TOKEN_URL"])
        self.client_id = os.getenv("GOOGLE_CLIENT_ID", "")
        self.client_secret = os.getenv("GOOGLE_CLIENT_SECRET", "")
        self.refresh_token = os.getenv("GOOGLE_REFRESH_TOKEN", "")
        self.access_token = os.getenv("GOOGLE_ACCESS_TOKEN", "")

        # Output configuration
        output_dir = os.getenv("OUTPUT_DIR", DEFAULT_SETTINGS["OUTPUT_DIR"])
        retention_days = int(
            os.getenv("OUTPUT_RETENTION_DAYS", str(DEFAULT_SETTINGS["OUTPUT_RETENTION_DAYS"]))
        )

        # Processing options
        self.continue_on_fail = os.getenv(
            "CONTINUE_ON_FAIL", str(DEFAULT_SETTINGS["CONTINUE_ON_FAIL"])
        ).lower() == "true"
        self.save_json = os.getenv("SAVE_JSON", str(DEFAULT_SETTINGS["SAVE_JSON"])).lower() == "true"
        self.debug = os.getenv("DEBUG", str(DEFAULT_SETTINGS["DEBUG"])).lower() == "true"

        self.output_manager = OutputManager(output_dir, retention_days)

    def validate_config(self) -> bool:
        """Validate that some form of Google credentials is configured."""
        errors = []

        if not self.api_base_url:
            errors.append("GOOGLE_CHAT_API_URL must not be empty")

        if not self.access_token:
            if not self.client_id:
                errors.append("GOOGLE_CLIENT_ID is required (or set GOOGLE_ACCESS_TOKEN)")
            if not self.client_secret:
                errors.append("GOOGLE_CLIENT_SECRET is required (or set GOOGLE_ACCESS_TOKEN)")
            if not self.refresh_token:
                errors.append("GOOGLE_REFRESH_TOKEN is required (or set GOOGLE_ACCESS_TOKEN)")

        if errors:
            print("\nConfiguration Errors:")
            for err in errors:
                print(f"  - {err}")
            return False
        return True

    def print_proxy_status(self):
        """Print proxy configuration status."""
        proxy_config = {}
        for var in PROXY_ENV_VARS:
            value = os.getenv(var)
            if value:
                display_value = value
                if '@' in value:
                    display_value = f"***@{value.split('@')[-1]}"
                proxy_config[var] = display_value

        if proxy_config:
            print("Proxy configuration:")
            for var, value in proxy_config.items():
                print(f"  {var}={value}")
        elif self.debug:
            print("Proxy: Not configured (direct connection)")

    def build_client(self) -> GoogleChatClient:
        auth = GoogleOAuthClient(
            client_id=self.client_id,
            client_secret=self.client_secret,
            refresh_token=self.refresh_token,
            access_token=self.access_token,
            token_url=self.token_url,
            timeout=self.request_timeout,
            debug=self.debug,
        )
        return GoogleChatClient(
            auth,
            api_base_url=self.api_base_url,
            timeout=self.request_timeout,
            debug=self.debug,
        )

    def run(self, job_path: str) -> Dict[str, Any]:
        """Execute a job file end to end."""
        results = {
            "started_at": datetime.now(timezone.utc).isoformat(),
            "job": job_path,
            "config": {
                "api_base_url": self.api_base_url,
                "continue_on_fail": self.continue_on_fail,
            },
            "success": False,
        }
        output = None

        try:
            # Step 1: Load job
            print(f"\n{'='*60}")
            print("STEP 1: LOAD JOB")
            print("="*60)
            parameters, records = load_job(job_path)
            results["resource"] = parameters.resource
            results["operation"] = parameters.operation
            print(f"  Operation: {parameters.resource}:{parameters.operation}")
            print(f"  Items: {len(records)}")

            # Step 2: Authenticate
            print(f"\n{'='*60}")
            print("STEP 2: GOOGLE OAUTH AUTHENTICATION")
            print("="*60)
            client = self.build_client()
            client.authenticate()
            print("  Google authentication successful")

            # Step 3: Execute items
            print(f"\n{'='*60}")
            print("STEP 3: EXECUTE ITEMS")
            print("="*60)
            executor = ChatExecutor(
                client,
                parameters,
                continue_on_fail=lambda: self.continue_on_fail,
                debug=self.debug,
            )
            output = executor.run(records)
            print(f"  Output entries: {len(output)}")
            if executor.failures:
                print(f"  Failed items (recorded as errors): {executor.failures}")

            results["success"] = True
            results["summary"] = {
                "items": len(records),
                "outputs": len(output),
                "errors": executor.failures,
            }

        except Exception as e:
            results["error"] = str(e)
            print(f"\n  ERROR: {e}")
            if self.debug:
                import traceback
                traceback.print_exc()

        results["completed_at"] = datetime.now(timezone.utc).isoformat()

        # Step 4: Save output
        if self.save_json:
            label = f"{results.get('resource', 'job')}_{results.get('operation', 'run')}"
            self.output_manager.create_run_dir(label)

            if output is not None:
                output_path = self.output_manager.get_output_path("output.json")
                with open(output_path, "w") as f:
                    json.dump(output, f, indent=2)
                results["output_path"] = output_path
                print(f"\n  Saved output: {output_path}")

            results_path = self.output_manager.get_output_path("run_results.json")
            with open(results_path, "w") as f:
                json.dump(results, f, indent=2, default=str)
            print(f"  Results saved to: {results_path}")

        return results

    def print_summary(self, results: Dict):
        """Print execution summary."""
        print(f"\n{'='*60}")
        print("RUN COMPLETE")
        print("="*60)
        print(f"Status: {'SUCCESS' if results.get('success') else 'FAILED'}")

        if results.get("resource"):
            print(f"Operation: {results['resource']}:{results.get('operation', '')}")

        summary = results.get("summary", {})
        if summary:
            print(f"Items: {summary.get('items', 0)}")
            print(f"Output entries: {summary.get('outputs', 0)}")
            print(f"Errors recorded: {summary.get('errors', 0)}")

        if results.get("error"):
            print(f"Error: {results['error']}")
