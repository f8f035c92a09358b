"""
Copyright (C) 2025  EntityStore Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of EntityStore. See the LICENSE file in the project
root for full license details.
"""
import time
from dataclasses import dataclass, field
from entity_store.service_health_enums import (ComponentDegradationLevel,
                                               ServiceDegradationStatus)


@dataclass
class StateObject:
    """
    Represents the health of the stores sharing it, including database
    status, service status, version, and startup time.

    Attributes:
        service_health (ComponentDegradationLevel): Health of the store code
                                                    itself (mappers, binders).
        service_health_state_str (str): A descriptive string representing the
                                        service health state.
        database_health (ComponentDegradationLevel): The current health status
                                                     of the database.
        database_health_state_str (str): A descriptive string representing the
                                         database health state.
        version (str): The version of the package.
        startup_time (int): The timestamp (Unix time) when the state object
                            was created.
    """
    service_health: ComponentDegradationLevel = ComponentDegradationLevel.NONE
    service_health_state_str: str = ""
    database_health: ComponentDegradationLevel = ComponentDegradationLevel.NONE
    database_health_state_str: str = ""
    version: str = ""
    startup_time: int = field(default_factory=lambda: int(time.time()))

    def health_report(self) -> dict:
        """
        Build a health summary of the database and service components.

        Returns:
            dict with the overall status, dependency levels, current issues
            (None when there are none), uptime and version.
        """
        uptime: int = int(time.time()) - self.startup_time
        issues: list = []

        if self.database_health != ComponentDegradationLevel.NONE:
            issues.append(
                {"component": "database",
                 "status": self.database_health.value,
                 "details": self.database_health_state_str})

        if self.service_health != ComponentDegradationLevel.NONE:
            issues.append(
                {"component": "service",
                 "status": self.service_health.value,
                 "details": self.service_health_state_str})

        if issues:
            status = ServiceDegradationStatus.CRITICAL.value \
                if any(issue["status"] ==
                       ComponentDegradationLevel.FULLY_DEGRADED.value
                       for issue in issues) \
                else ServiceDegradationStatus.DEGRADED.value
        else:
            status = ServiceDegradationStatus.HEALTHY.value

        return {
            "status": status,
            "dependencies": {
                "database": self.database_health.value,
                "service": self.service_health.value
            },
            "issues": issues if issues else None,
            "uptime_seconds": uptime,
            "version": self.version
        }
