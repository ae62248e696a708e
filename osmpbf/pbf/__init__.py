# © Copyright 2024 Mikołaj Kuranowski
# SPDX-License-Identifier: GPL-3.0-or-later

"""Protocol buffer bindings of the OSM PBF schemas, see fileformat.proto and osmformat.proto."""
