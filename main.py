#This file is for development purposes only

import logging

from jira_rest_client import get_client


def main():
    logging.basicConfig(level=logging.INFO)
    print("Connecting to Jira...")
    with get_client(interactive=True) as client:
        print("\nPriorities:")
        result = client.get_priorities()
        if result.ok:
            for priority in result.value:
                print(f"- {priority.id}: {priority.name}")
        else:
            print(f"Error connecting to Jira: {result.error}")

        print("\nFirst issues of a project...")
        project_key = input("Project key: ").strip()
        result = client.get_issues_by_project(project_key, 0, 5, ["summary", "status"])
        if result.ok:
            for issue in result.value.issues:
                print(f"- {issue}")
        else:
            print(f"Error searching Jira: {result.error}")

if __name__ == "__main__":
    main()
