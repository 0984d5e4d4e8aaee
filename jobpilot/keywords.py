"""Keyword lists and the skill taxonomy.

All matching against these lists is case-insensitive substring containment
(see `normalize.check_keywords`), so every entry here is lower-case. Short
aliases can match inside unrelated words; that imprecision is accepted.
"""

from __future__ import annotations

from typing import List, NamedTuple, Tuple


class Skill(NamedTuple):
    key: str
    aliases: Tuple[str, ...]


# Target role: IT system administration and support. Matched against the title only.
IT_SYSADMIN_KEYWORDS: List[str] = [
    "systemadministrator",
    "system administrator",
    "systems administrator",
    "sysadmin",
    "it-administrator",
    "it administrator",
    "administrator",
    "fachinformatiker",
    "systemintegration",
    "it-support",
    "it support",
    "helpdesk",
    "help desk",
    "service desk",
    "servicedesk",
    "1st level",
    "2nd level",
    "first level",
    "second level",
    "it-systemelektroniker",
    "it-techniker",
    "it techniker",
    "netzwerkadministrator",
    "network administrator",
    "client management",
    "it-spezialist",
]

CAREER_SWITCH_KEYWORDS: List[str] = [
    "quereinsteiger",
    "quereinstieg",
    "quer-einsteiger",
    "career changer",
    "career change",
    "umschulung",
    "umschüler",
    "ohne berufserfahrung",
    "keine berufserfahrung",
    "auch ohne ausbildung",
    "berufseinsteiger",
]

JUNIOR_LEVEL_KEYWORDS: List[str] = [
    "junior",
    "einsteiger",
    "entry level",
    "entry-level",
    "trainee",
    "absolvent",
    "graduate",
    "berufsanfänger",
    "young professional",
]

# Search terms sent to the query-based sources.
PRIMARY_SEARCH_QUERIES: List[str] = [
    "Systemadministrator",
    "IT-Administrator",
    "Fachinformatiker Systemintegration",
    "IT Support",
    "Linux Administrator",
    "Netzwerkadministrator",
    "Helpdesk",
]

JOBICY_TAGS: List[str] = [
    "sysadmin",
    "support",
    "devops",
    "administrator",
    "netzwerk",
    "cloud",
    "it-support",
    "linux",
    "windows",
    "security",
    "infrastructure",
]

HEALTHCARE_KEYWORDS: List[str] = [
    "gesundheitswesen",
    "klinik",
    "krankenhaus",
    "praxis",
    "medizin",
    "pharma",
    "healthcare",
    "hospital",
    "clinic",
    "medical",
    "e-health",
    "digital health",
    "ärzte",
    "pflege",
    "labor",
    "diagnostik",
    "medizintechnik",
    "reha",
]

SKILL_TAXONOMY: List[Skill] = [
    Skill("Active Directory", ("active directory", "entra id", "azure ad")),
    Skill("Windows Server", ("windows server", "windows-server")),
    Skill("Windows Client", ("windows 10", "windows 11", "windows-client", "windows client")),
    Skill("Linux", ("linux", "debian", "ubuntu", "red hat", "redhat", "rhel", "centos", "suse")),
    Skill("Microsoft 365", ("microsoft 365", "m365", "office 365", "o365")),
    Skill("Exchange", ("exchange",)),
    Skill("VMware", ("vmware", "vsphere", "esxi")),
    Skill("Hyper-V", ("hyper-v",)),
    Skill("Azure", ("azure",)),
    Skill("AWS", ("aws", "amazon web services")),
    Skill("Docker", ("docker",)),
    Skill("Kubernetes", ("kubernetes", "k8s")),
    Skill("PowerShell", ("powershell",)),
    Skill("Bash", ("bash", "shell-scripting", "shell scripting")),
    Skill("Python", ("python",)),
    Skill("Ansible", ("ansible",)),
    Skill("Terraform", ("terraform",)),
    Skill("Netzwerk (TCP/IP)", ("tcp/ip", "netzwerktechnik", "netzwerk", "networking", "switching", "routing")),
    Skill("Firewall", ("firewall", "fortinet", "sophos", "palo alto")),
    Skill("VPN", ("vpn",)),
    Skill("DNS/DHCP", ("dns", "dhcp")),
    Skill("Backup", ("backup", "veeam", "datensicherung")),
    Skill("Monitoring", ("monitoring", "nagios", "zabbix", "prtg", "checkmk")),
    Skill("ITIL", ("itil",)),
    Skill("Ticketsystem", ("ticketsystem", "ticket-system", "jira", "servicenow", "otrs")),
    Skill("SQL", ("sql", "datenbank", "database")),
    Skill("IT-Sicherheit", ("it-sicherheit", "informationssicherheit", "security", "cyber")),
    Skill("Citrix", ("citrix",)),
    Skill("Intune/MDM", ("intune", "mobile device management", "mdm")),
    Skill("Webserver", ("apache", "nginx", "webserver", "iis")),
    Skill("Git", ("gitlab", "github", "git ")),
    Skill("Englisch", ("englisch", "english")),
]

# --- Locale admission tables -------------------------------------------------

GERMAN_LOCATION_KEYWORDS: List[str] = [
    "deutschland",
    "germany",
    "berlin",
    "hamburg",
    "münchen",
    "munich",
    "köln",
    "cologne",
    "frankfurt",
    "stuttgart",
    "düsseldorf",
    "dortmund",
    "essen",
    "leipzig",
    "bremen",
    "dresden",
    "hannover",
    "nürnberg",
]

FORBIDDEN_REMOTE_LOCATIONS: List[str] = [
    "usa only",
    "u.s. only",
    "canada only",
    "uk only",
    "united states",
    "united kingdom",
    "north america",
    "south america",
    "africa",
    "asia",
]

NON_GERMAN_CITIES: List[str] = [
    "paris",
    "warsaw",
    "amsterdam",
    "london",
    "madrid",
    "vienna",
    "zurich",
    "wien",
    "zürich",
]
