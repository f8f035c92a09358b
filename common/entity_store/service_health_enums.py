"""
Copyright (C) 2025  EntityStore Development Team
SPDX-License-Identifier: AGPL-3.0-or-later

This file is part of EntityStore. See the LICENSE file in the project
root for full license details.
"""
from enum import Enum


class ServiceDegradationStatus(Enum):
    """ Overall store health as reported by a health check """

    # Every round trip is succeeding
    HEALTHY = "healthy"

    # A component is reporting partial failures
    DEGRADED = "degraded"

    # The database is unreachable or every call is failing
    CRITICAL = "critical"


class ComponentDegradationLevel(Enum):
    """ Component degradation Level """

    NONE = "none"
    PART_DEGRADED = "partial"
    FULLY_DEGRADED = "fully_degraded"
