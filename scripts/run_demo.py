#!/usr/bin/env python3
"""
run_demo.py - End-to-end demo of the shipment lifecycle
- Registers/logs in an operator, a carrier and a customer
- Operator creates a shipment for the customer
- Carrier lists claimable work and claims the shipment (In Transit)
- Carrier completes the delivery
- Customer reads their notifications and the shipment history
"""

import requests
import json
import os
from typing import Dict, Any, Optional, List

class DemoRunner:
    def __init__(self):
        self.base_url = os.getenv("SHIPTRACK_URL", "http://localhost:8000")
        self.auth_url = f"{self.base_url}/api/auth"
        self.shipments_url = f"{self.base_url}/api/shipments"
        self.notifications_url = f"{self.base_url}/api/notifications"
        self.password = "P@ssw0rd!"

        self.users = {
            "operator": {"username": "demo-operator", "email": "operator@example.com"},
            "carrier": {"username": "demo-carrier", "email": "carrier@example.com"},
            "customer": {"username": "demo-customer", "email": "customer@example.com"},
        }
        # role -> (user id, access token)
        self.sessions: Dict[str, Dict[str, Any]] = {}

    # ---------- helpers ----------
    def show_step(self, title: str):
        print(f"\n=== {title} ===")

    def mask_token(self, token: str) -> str:
        if not token:
            return "<none>"
        return token if len(token) <= 12 else f"{token[:8]}...{token[-6:]}"

    def headers(self, role: str) -> Dict[str, str]:
        token = self.sessions.get(role, {}).get("token")
        return {"Authorization": f"Bearer {token}"} if token else {}

    def call_api(
        self,
        method: str,
        url: str,
        headers: Optional[Dict] = None,
        data: Optional[Any] = None,
        expected_status: List[int] = [200, 201, 204],
        quiet: bool = False,
        timeout: int = 30,
    ):
        if not quiet:
            print(f"\n-> {method} {url}")
            if data is not None:
                print(f"   Body: {json.dumps(data, indent=2)}")

        try:
            resp = requests.request(method=method, url=url, headers=headers, json=data, timeout=timeout)
            if not quiet:
                status_color = "\033[92m" if resp.status_code in expected_status else "\033[93m"
                print(f"   Status: {status_color}{resp.status_code}\033[0m")
            try:
                js = resp.json()
                if not quiet:
                    print("   JSON:")
                    print(json.dumps(js, indent=2))
                return {"status": resp.status_code, "data": js}
            except json.JSONDecodeError:
                return {"status": resp.status_code, "data": None}
        except requests.exceptions.RequestException as e:
            if not quiet:
                print(f"   Error: \033[91m{e}\033[0m")
            return {"status": None, "data": None, "error": str(e)}

    # ---------- flow ----------
    def login_all(self):
        for role, user in self.users.items():
            self.show_step(f"{role.title()}: register")
            self.call_api(
                "POST",
                f"{self.auth_url}/register",
                data={**user, "password": self.password, "role": role},
                expected_status=[201, 409],
            )
            self.show_step(f"{role.title()}: login")
            lr = self.call_api(
                "POST",
                f"{self.auth_url}/login",
                data={"username": user["username"], "password": self.password},
                quiet=True,
            )
            data = lr.get("data") or {}
            if data.get("token"):
                self.sessions[role] = {"id": data["user"]["id"], "token": data["token"]}
                print(f"{role} token: {self.mask_token(data['token'])}")

    def run_demo(self):
        print("Starting Shipment Lifecycle Demo")
        print("=" * 50)

        health = self.call_api("GET", f"{self.base_url}/health", quiet=True)
        if health.get("status") != 200:
            print(f"\033[91mService not reachable at {self.base_url}\033[0m")
            return

        self.login_all()
        if len(self.sessions) != len(self.users):
            print("\033[91mCould not log in every demo user; aborting.\033[0m")
            return

        self.show_step("Operator: create shipment")
        created = self.call_api(
            "POST",
            self.shipments_url,
            headers=self.headers("operator"),
            data={
                "customerId": self.sessions["customer"]["id"],
                "origin": "Dublin",
                "destination": "Cork",
                "weight": 12.5,
            },
        )
        shipment_id = (created.get("data") or {}).get("id")
        if not shipment_id:
            print("Skipping the rest - shipment was not created")
            return

        self.show_step("Carrier: list claimable work")
        self.call_api("GET", self.shipments_url, headers=self.headers("carrier"))

        self.show_step("Carrier: claim shipment")
        self.call_api(
            "PUT",
            f"{self.shipments_url}/{shipment_id}",
            headers=self.headers("carrier"),
            data={"carrierId": self.sessions["carrier"]["id"], "status": "In Transit", "note": "Picked up"},
        )

        self.show_step("Customer: try to change status (expect 403)")
        self.call_api(
            "PUT",
            f"{self.shipments_url}/{shipment_id}",
            headers=self.headers("customer"),
            data={"status": "Delivered"},
            expected_status=[403],
        )

        self.show_step("Carrier: complete delivery")
        self.call_api(
            "POST",
            f"{self.shipments_url}/{shipment_id}/complete",
            headers=self.headers("carrier"),
            data={"receivedBy": "Front desk"},
        )

        self.show_step("Customer: notifications")
        self.call_api("GET", self.notifications_url, headers=self.headers("customer"))

        self.show_step("Customer: shipment history")
        shp = self.call_api("GET", f"{self.shipments_url}/{shipment_id}", headers=self.headers("customer"), quiet=True)
        for entry in (shp.get("data") or {}).get("history", []):
            print(f"  - {entry['timestamp']}  {entry['status'].ljust(12)} by {entry['updatedBy']} ({entry['role']}): {entry['note']}")

        self.show_step("Operator: stats")
        self.call_api("GET", f"{self.shipments_url}/stats", headers=self.headers("operator"))

        print("\n\033[92m=== DEMO COMPLETE ===\033[0m")


if __name__ == "__main__":
    DemoRunner().run_demo()
